"""Configuration management."""

from html_localizer.config.settings import Config

__all__ = ['Config']
