"""Dependencies that hand configured engine collaborators to the routes."""

from __future__ import annotations

from fastapi import Depends

from app.config import AppSettings, get_settings
from networth.commentary import CommentaryService
from networth.fx import CurrencyNormalizer


def get_app_settings() -> AppSettings:
    return get_settings()


def get_normalizer(settings: AppSettings = Depends(get_app_settings)) -> CurrencyNormalizer:
    return settings.normalizer()


def get_commentary_service(settings: AppSettings = Depends(get_app_settings)) -> CommentaryService:
    return CommentaryService(settings.openai_api_key, settings.openai_model)


__all__ = ["get_app_settings", "get_commentary_service", "get_normalizer"]
