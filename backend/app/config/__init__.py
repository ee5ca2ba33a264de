"""Configuration package for the net-worth service."""

from .settings import AppSettings, get_settings

__all__ = ["AppSettings", "get_settings"]
