"""Field extraction."""

from html_localizer.extractors.field_extractor import FieldExtractor, ExtractionResult

__all__ = ['FieldExtractor', 'ExtractionResult']
