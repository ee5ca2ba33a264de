"""OpenTelemetry wiring plus the spans and counters the net-worth routes emit.

Spans and counters go through the global OpenTelemetry API, which is a no-op
until :func:`setup_telemetry` installs real providers.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import FastAPI
from opentelemetry import metrics, trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.semconv.resource import ResourceAttributes

from app.config import AppSettings

logger = logging.getLogger(__name__)

_INSTRUMENTATION_NAME = "networth"
_METRIC_EXPORT_INTERVAL_MS = 10000
_initialised = False

_tracer = trace.get_tracer(_INSTRUMENTATION_NAME)
_meter = metrics.get_meter(_INSTRUMENTATION_NAME)
_import_rows = _meter.create_counter(
    "networth.import.rows",
    unit="1",
    description="Rows accepted by the bulk importer",
)
_snapshot_writes = _meter.create_counter(
    "networth.import.snapshots",
    unit="1",
    description="Snapshots created or replaced by bulk imports",
)


@contextmanager
def engine_span(operation: str, **attributes: Any) -> Iterator[trace.Span]:
    """Wrap one aggregation call in a span tagged with input sizes."""

    with _tracer.start_as_current_span(f"networth.{operation}") as span:
        for key, value in attributes.items():
            span.set_attribute(f"networth.{key}", value)
        yield span


def record_import(kind: str, rows: int, created: int = 0, updated: int = 0) -> None:
    _import_rows.add(rows, {"kind": kind})
    if created:
        _snapshot_writes.add(created, {"kind": kind, "action": "created"})
    if updated:
        _snapshot_writes.add(updated, {"kind": kind, "action": "replaced"})


def setup_telemetry(app: FastAPI, settings: AppSettings) -> None:
    """Install OTLP exporters and instrument FastAPI plus outbound httpx calls."""

    global _initialised  # noqa: PLW0603 - single initialisation guard

    if _initialised:
        return
    if not settings.telemetry_enabled:
        logger.info("Telemetry disabled via configuration")
        return

    resource = Resource.create(
        {
            ResourceAttributes.SERVICE_NAME: settings.telemetry_service_name or settings.app_name,
            ResourceAttributes.SERVICE_NAMESPACE: _INSTRUMENTATION_NAME,
        }
    )
    exporter_options: dict[str, Any] = {"insecure": settings.telemetry_otlp_insecure}
    if settings.telemetry_otlp_endpoint:
        exporter_options["endpoint"] = settings.telemetry_otlp_endpoint

    tracer_provider = TracerProvider(
        resource=resource,
        sampler=ParentBased(TraceIdRatioBased(settings.telemetry_sample_ratio)),
    )
    tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(**exporter_options)))
    trace.set_tracer_provider(tracer_provider)

    meter_provider = MeterProvider(
        resource=resource,
        metric_readers=[
            PeriodicExportingMetricReader(
                OTLPMetricExporter(**exporter_options),
                export_interval_millis=_METRIC_EXPORT_INTERVAL_MS,
            )
        ],
    )
    metrics.set_meter_provider(meter_provider)

    logger_provider = LoggerProvider(resource=resource)
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(OTLPLogExporter(**exporter_options)))
    set_logger_provider(logger_provider)
    LoggingInstrumentor().instrument(set_logging_format=False)

    FastAPIInstrumentor.instrument_app(app, tracer_provider=tracer_provider, meter_provider=meter_provider)
    # The OpenAI SDK talks over httpx, so commentary calls get spans too
    HTTPXClientInstrumentor().instrument()

    _initialised = True
    logger.info("Telemetry initialised for %s", settings.telemetry_service_name)


__all__ = ["engine_span", "record_import", "setup_telemetry"]
