"""Core components - fundamental classes and definitions."""

from html_localizer.core.constants import *
from html_localizer.core.exceptions import *
from html_localizer.core.models import *
from html_localizer.core.options import ProjectOptions

__all__ = ['constants', 'exceptions', 'models', 'options']
