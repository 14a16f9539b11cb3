"""
Geometry primitives: positioned boxes and text blocks in slide inches.

Box and TextBlock form a tagged union on `kind` so validators can tell
text-bearing elements from pure shapes without probing for attributes.
"""

import math
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import Field, field_validator

from slidekit.config.engine_config import GEOMETRY_EPSILON
from slidekit.models.base import EngineModel


ShapeType = Literal['rectangle', 'ellipse', 'line', 'arrow']
TextAlign = Literal['left', 'center', 'right', 'justify']
VerticalAlign = Literal['top', 'middle', 'bottom']


def _require_finite(value: float) -> float:
    if not math.isfinite(value):
        raise ValueError(f"coordinate must be finite, got {value!r}")
    return value


class Box(EngineModel):
    """Positioned rectangle. Pure shape unless refined by TextBlock."""
    kind: Literal['shape'] = 'shape'
    x: float
    y: float
    width: float
    height: float
    shape: ShapeType = 'rectangle'
    fill_color: Optional[str] = Field(default=None, description="Hex fill color")
    line_color: Optional[str] = Field(default=None, description="Hex outline color")
    line_width: float = 0
    role: Optional[str] = Field(default=None, description="Composer label, e.g. 'timeline-marker'")

    @field_validator('x', 'y')
    @classmethod
    def _finite_position(cls, value: float) -> float:
        return _require_finite(value)

    @field_validator('width', 'height')
    @classmethod
    def _non_negative_size(cls, value: float) -> float:
        _require_finite(value)
        if value < 0:
            raise ValueError(f"size must be >= 0, got {value}")
        return value

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def overlaps(self, other: "Box") -> bool:
        """Axis-aligned intersection test; boxes that only touch do not overlap."""
        return not (
            self.right <= other.x + GEOMETRY_EPSILON
            or other.right <= self.x + GEOMETRY_EPSILON
            or self.bottom <= other.y + GEOMETRY_EPSILON
            or other.bottom <= self.y + GEOMETRY_EPSILON
        )

    def translated(self, dx: float, dy: float) -> "Box":
        return self.model_copy(update={'x': self.x + dx, 'y': self.y + dy})


class TextBlock(Box):
    """Box carrying text and its typographic style."""
    kind: Literal['text'] = 'text'
    text: str = ''
    font_size: float
    color: str = Field(description="Hex text color stored without '#'")
    bold: bool = False
    italic: bool = False
    align: TextAlign = 'left'
    valign: VerticalAlign = 'top'
    font_family: Optional[str] = None

    @field_validator('font_size')
    @classmethod
    def _positive_font_size(cls, value: float) -> float:
        _require_finite(value)
        if value <= 0:
            raise ValueError(f"font_size must be > 0, got {value}")
        return value

    @field_validator('color')
    @classmethod
    def _strip_hash(cls, value: str) -> str:
        return value.lstrip('#').upper()


LayoutElement = Annotated[Union[Box, TextBlock], Field(discriminator='kind')]


class LayoutSpec(EngineModel):
    """The complete set of positioned elements for one slide (or a fragment of one)."""
    slide_width: float
    slide_height: float
    content: List[LayoutElement] = Field(default_factory=list)

    @field_validator('slide_width', 'slide_height')
    @classmethod
    def _positive_canvas(cls, value: float) -> float:
        _require_finite(value)
        if value <= 0:
            raise ValueError(f"slide dimensions must be > 0, got {value}")
        return value

    @classmethod
    def for_theme(cls, theme, content: Optional[List[Box]] = None) -> "LayoutSpec":
        return cls(
            slide_width=theme.layout.slide_width,
            slide_height=theme.layout.slide_height,
            content=list(content or []),
        )

    def text_blocks(self) -> List[TextBlock]:
        return [el for el in self.content if el.kind == 'text']

    def shapes(self) -> List[Box]:
        return [el for el in self.content if el.kind == 'shape']

    def combined_with(self, *fragments: "LayoutSpec") -> "LayoutSpec":
        """New layout holding this layout's content followed by each fragment's, in order."""
        content = list(self.content)
        for fragment in fragments:
            content.extend(fragment.content)
        return self.model_copy(update={'content': content})


def create_box(x: float, y: float, width: float, height: float, **style) -> Box:
    return Box(x=x, y=y, width=width, height=height, **style)


def create_text_block(box: Box, text: str, font_size: float, color: str, **style) -> TextBlock:
    """Text block occupying the geometry of `box`."""
    return TextBlock(
        x=box.x,
        y=box.y,
        width=box.width,
        height=box.height,
        text=text,
        font_size=font_size,
        color=color,
        **style
    )
