"""
Theme tokens: the fully-resolved theme consumed by the composer and validator.

Resolution of presets and defaults happens upstream; the engine reads these
values as given.
"""

from typing import Optional

from pydantic import Field, field_validator

from slidekit.models.base import EngineModel


class TextColors(EngineModel):
    primary: str
    secondary: str


class BorderColors(EngineModel):
    light: str
    medium: str


class SemanticColors(EngineModel):
    success: str
    warning: str
    error: str
    info: str


class Palette(EngineModel):
    primary: str
    secondary: str
    accent: str
    background: str
    surface: str
    text: TextColors
    borders: BorderColors
    semantic: SemanticColors


class FontSizes(EngineModel):
    """Font sizes in points per typographic role."""
    h1: float
    h2: float
    body: float
    caption: float


class FontFamilies(EngineModel):
    heading: str = 'Calibri'
    body: str = 'Calibri'


class Typography(EngineModel):
    font_sizes: FontSizes
    font_families: FontFamilies = Field(default_factory=FontFamilies)


class SpacingScale(EngineModel):
    """Spacing scale in inches."""
    xs: float
    sm: float
    md: float
    lg: float
    xl: float


class LayoutConstants(EngineModel):
    slide_width: float
    slide_height: float
    safe_margin: float
    grid_columns: int = 12
    grid_gutter: float = 0.25

    @field_validator('slide_width', 'slide_height')
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f"slide dimensions must be > 0, got {value}")
        return value

    @property
    def content_width(self) -> float:
        return self.slide_width - 2 * self.safe_margin

    @property
    def content_height(self) -> float:
        return self.slide_height - 2 * self.safe_margin


class ThemeTokens(EngineModel):
    name: Optional[str] = None
    palette: Palette
    typography: Typography
    spacing: SpacingScale
    layout: LayoutConstants
