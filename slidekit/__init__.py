"""
slidekit: slide layout composition and style validation.

Turns a slide content request plus a resolved theme into positioned shapes and
text on a fixed canvas, then scores the result against design rules.
"""

from slidekit.exceptions import LayoutEngineError, LayoutContractError, CompositionError
from slidekit.generation import (
    SlideBuilder,
    SlideRequest,
    validate_layout_spec,
    validate_slide_build_result,
)
from slidekit.models import LayoutSpec, ThemeTokens, ValidationResult

__version__ = "0.1.0"

__all__ = [
    'LayoutEngineError',
    'LayoutContractError',
    'CompositionError',
    'SlideBuilder',
    'SlideRequest',
    'validate_layout_spec',
    'validate_slide_build_result',
    'LayoutSpec',
    'ThemeTokens',
    'ValidationResult',
]
