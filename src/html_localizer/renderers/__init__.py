"""Localized document rendering."""

from html_localizer.renderers.localizer import DocumentLocalizer

__all__ = ['DocumentLocalizer']
