"""
Grid and spacing helpers for placing regions on the slide canvas.

12-column grid inside the theme's safe margins, plus padding and
distribution utilities used by the slide builder to carve regions that the
composer then fills.
"""

from dataclasses import dataclass
from typing import Dict, List, Literal

from slidekit.exceptions import InvalidGridColumnError
from slidekit.models.geometry import Box
from slidekit.models.theme import ThemeTokens

Alignment = Literal['start', 'center', 'end', 'space-between', 'space-around']


@dataclass(frozen=True)
class GridColumn:
    """Column placement (1-indexed start)"""
    start: int
    span: int


@dataclass(frozen=True)
class GridConfig:
    """Column grid for consistent positioning"""
    columns: int
    gutter: float
    container_width: float
    container_height: float
    margin_top: float
    margin_left: float

    @classmethod
    def from_theme(cls, theme: ThemeTokens) -> "GridConfig":
        layout = theme.layout
        return cls(
            columns=layout.grid_columns,
            gutter=layout.grid_gutter,
            container_width=layout.content_width,
            container_height=layout.content_height,
            margin_top=layout.safe_margin,
            margin_left=layout.safe_margin,
        )

    @property
    def column_width(self) -> float:
        return (self.container_width - (self.columns - 1) * self.gutter) / self.columns

    def get_column_position(self, start_col: int, span: int):
        """Get x position and width for columns (1-indexed)"""
        validate_grid_column(GridColumn(start_col, span), self)
        start_index = start_col - 1
        x = self.margin_left + start_index * (self.column_width + self.gutter)
        width = span * self.column_width + (span - 1) * self.gutter
        return x, width

    def get_row_position(self, row: int, row_height: float, row_gutter: float):
        """Get y position and height for a 1-indexed row"""
        row_index = row - 1
        y = self.margin_top + row_index * (row_height + row_gutter)
        return y, row_height


LAYOUT_PRESETS: Dict[str, GridColumn] = {
    'FULL': GridColumn(1, 12),
    'HALF_LEFT': GridColumn(1, 6),
    'HALF_RIGHT': GridColumn(7, 6),
    'THIRD_LEFT': GridColumn(1, 4),
    'THIRD_CENTER': GridColumn(5, 4),
    'THIRD_RIGHT': GridColumn(9, 4),
    'SIDEBAR_LEFT': GridColumn(1, 3),
    'MAIN_RIGHT': GridColumn(4, 9),
    'MAIN_LEFT': GridColumn(1, 9),
    'SIDEBAR_RIGHT': GridColumn(10, 3),
    'CONTENT_NARROW': GridColumn(2, 10),
    'CONTENT_MEDIUM': GridColumn(3, 8),
    'CONTENT_TIGHT': GridColumn(4, 6),
}


def validate_grid_column(column: GridColumn, config: GridConfig) -> None:
    if not (
        1 <= column.start <= config.columns
        and column.span >= 1
        and column.start + column.span - 1 <= config.columns
    ):
        raise InvalidGridColumnError(column.start, column.span, config.columns)


def content_region(theme: ThemeTokens) -> Box:
    """The canvas inset by the safe margin on every side."""
    margin = theme.layout.safe_margin
    return Box(
        x=margin,
        y=margin,
        width=theme.layout.content_width,
        height=theme.layout.content_height,
        role='content-region',
    )


def create_grid_box(column: GridColumn, config: GridConfig, height: float, y_offset: float = 0) -> Box:
    x, width = config.get_column_position(column.start, column.span)
    return Box(x=x, y=config.margin_top + y_offset, width=width, height=height)


def create_multi_column_layout(
    columns: List[GridColumn],
    config: GridConfig,
    height: float,
    y_offset: float = 0
) -> List[Box]:
    return [create_grid_box(column, config, height, y_offset) for column in columns]


def equal_columns(count: int, config: GridConfig) -> List[GridColumn]:
    """Split the grid into `count` equal columns when the grid divides evenly, else nearest spans."""
    if count <= 0:
        return []
    count = min(count, config.columns)
    columns = []
    start = 1
    for index in range(count):
        remaining_cols = config.columns - start + 1
        span = max(1, round(remaining_cols / (count - index)))
        columns.append(GridColumn(start, span))
        start += span
    return columns


def apply_padding(box: Box, top: float, right: float = None, bottom: float = None, left: float = None) -> Box:
    """Shrink a box by CSS-style padding (1 to 4 values)."""
    right = top if right is None else right
    bottom = top if bottom is None else bottom
    left = right if left is None else left
    return box.model_copy(update={
        'x': box.x + left,
        'y': box.y + top,
        'width': max(0.0, box.width - left - right),
        'height': max(0.0, box.height - top - bottom),
    })


def _distribution_start(available: float, count: int, spacing: float, alignment: Alignment):
    """Return (first offset, spacing) for an alignment mode."""
    if alignment == 'center':
        return available / 2, spacing
    if alignment == 'end':
        return available, spacing
    if alignment == 'space-between':
        return 0.0, (spacing + available / (count - 1)) if count > 1 else 0.0
    if alignment == 'space-around':
        around = (available + (count - 1) * spacing) / count
        return around / 2, around
    return 0.0, spacing


def distribute_vertically(
    boxes: List[Box],
    container_height: float,
    spacing: float,
    alignment: Alignment = 'start',
    origin_y: float = 0.0
) -> List[Box]:
    """Restack boxes top to bottom inside a container of the given height."""
    if not boxes:
        return []
    total = sum(box.height for box in boxes) + (len(boxes) - 1) * spacing
    offset, spacing = _distribution_start(container_height - total, len(boxes), spacing, alignment)

    placed = []
    current = origin_y + offset
    for box in boxes:
        placed.append(box.model_copy(update={'y': current}))
        current += box.height + spacing
    return placed


def distribute_horizontally(
    boxes: List[Box],
    container_width: float,
    spacing: float,
    alignment: Alignment = 'start',
    origin_x: float = 0.0
) -> List[Box]:
    """Lay boxes out left to right inside a container of the given width."""
    if not boxes:
        return []
    total = sum(box.width for box in boxes) + (len(boxes) - 1) * spacing
    offset, spacing = _distribution_start(container_width - total, len(boxes), spacing, alignment)

    placed = []
    current = origin_x + offset
    for box in boxes:
        placed.append(box.model_copy(update={'x': current}))
        current += box.width + spacing
    return placed
