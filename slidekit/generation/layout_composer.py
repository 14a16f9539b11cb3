"""
Layout composer: turns one content request plus a target region into a
LayoutSpec fragment of positioned shapes and text.

Every compose_* function is pure. It takes a region Box and the resolved
ThemeTokens, and returns a fragment sized to the theme canvas that the slide
builder concatenates with the rest of the slide.
"""

import re
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from slidekit.config.engine_config import (
    TIMELINE_MARKER_SIZE,
    TIMELINE_LINE_WIDTH,
    TIMELINE_VERTICAL_LINE_OFFSET,
    TIMELINE_HEADING_HEIGHT,
    TIMELINE_HEADING_GAP,
    TIMELINE_TITLE_OFFSET,
    TIMELINE_TITLE_HEIGHT,
    TIMELINE_DATE_OFFSET,
    TIMELINE_DATE_HEIGHT,
    TIMELINE_VERTICAL_TEXT_GAP,
    TIMELINE_VERTICAL_TITLE_HEIGHT,
    TIMELINE_VERTICAL_DATE_HEIGHT,
    CALLOUT_ACCENT_WIDTH,
    CALLOUT_PADDING_TOP,
    CALLOUT_PADDING_LEFT,
    CALLOUT_PADDING_RIGHT,
    CALLOUT_TITLE_HEIGHT,
    CALLOUT_TITLE_ADVANCE,
    CALLOUT_BACKGROUND_TINT,
    CALLOUT_BORDER_WIDTH,
    CARD_ACCENT_HEIGHT,
    CARD_PADDING,
    CARD_FEATURE_ROW,
    CARD_BULLET_SIZE,
    CARD_TITLE_HEIGHT,
    CARD_DESCRIPTION_HEIGHT,
    CARD_INNER_PADDING,
    PROCESS_CIRCLE_SIZE,
    PROCESS_STEP_GAP,
    PROCESS_ARROW_SIZE,
    PROCESS_TITLE_HEIGHT,
    CHART_LEGEND_HEIGHT,
    CHART_LEGEND_SWATCH,
    CHART_TITLE_HEIGHT,
    CHART_SUBTITLE_HEIGHT,
    THEME_CHART_EXTRAS,
    VIBRANT_CHART_COLORS,
    CHART_LADDER_SIZE,
    GEOMETRY_EPSILON,
)
from slidekit.exceptions import LayoutContractError
from slidekit.generation.color_science import (
    ensure_contrast,
    get_readable_text_color,
    safe_color_format,
    shade,
    tint,
)
from slidekit.models.content import (
    CalloutSpec,
    CalloutType,
    ChartOptions,
    ChartSeries,
    ColorScheme,
    FeatureCardSpec,
    MetricCardSpec,
    ProcessStep,
    TableCell,
    TableOptions,
    TableSpec,
    TimelineEvent,
    TimelineOptions,
)
from slidekit.models.geometry import Box, LayoutSpec, TextBlock
from slidekit.models.theme import ThemeTokens
from slidekit.setup_logging_optimized import get_logger

logger = get_logger(__name__)

_NUMERIC_TEXT = re.compile(r'^[\d.,$€£¥]+$')
_CODE_TOKEN = re.compile(r'^[A-Z0-9-]+$')


def _require_region(region: Box, composer: str) -> None:
    if not isinstance(region, Box):
        raise LayoutContractError(
            f"{composer} needs a Box region",
            context={'region_type': type(region).__name__},
        )


def _require_size(width: float, height: float, role: Optional[str]) -> Tuple[float, float]:
    """Computed element size; a region too small for its content is a contract error."""
    if width < -GEOMETRY_EPSILON or height < -GEOMETRY_EPSILON:
        raise LayoutContractError(
            f"Region too small for {role or 'element'}: computed {width:.3f}in x {height:.3f}in",
            context={'role': role, 'width': width, 'height': height},
        )
    return max(0.0, width), max(0.0, height)


def _color(value: str) -> str:
    return safe_color_format(value)


def _text(theme: ThemeTokens, x: float, y: float, width: float, height: float,
          text: str, font_size: float, color: str, heading: bool = False, **style) -> TextBlock:
    families = theme.typography.font_families
    width, height = _require_size(width, height, style.get('role'))
    return TextBlock(
        x=x,
        y=y,
        width=width,
        height=height,
        text=text,
        font_size=font_size,
        color=_color(color),
        font_family=families.heading if heading else families.body,
        **style
    )


#==============================================================================
# TIMELINES
#==============================================================================

def compose_timeline(
    events: List[TimelineEvent],
    region: Box,
    theme: ThemeTokens,
    options: Optional[TimelineOptions] = None
) -> LayoutSpec:
    """Timeline in either orientation, with an optional heading above the region."""
    options = options or TimelineOptions()
    _require_region(region, 'compose_timeline')

    if options.orientation == 'vertical':
        fragment = compose_vertical_timeline(
            events, region, theme,
            show_dates=options.show_dates,
            show_descriptions=options.show_descriptions,
        )
    else:
        fragment = compose_horizontal_timeline(events, region, theme, show_dates=options.show_dates)

    if not options.title:
        return fragment

    heading = _text(
        theme,
        region.x,
        region.y - TIMELINE_HEADING_GAP,
        region.width,
        TIMELINE_HEADING_HEIGHT,
        options.title,
        theme.typography.font_sizes.h2,
        theme.palette.text.primary,
        heading=True,
        bold=True,
        align='center',
        role='timeline-heading',
    )
    return LayoutSpec.for_theme(theme, [heading]).combined_with(fragment)


def _timeline_marker(theme: ThemeTokens, event: TimelineEvent, x: float, y: float) -> Box:
    palette = theme.palette
    return Box(
        x=x,
        y=y,
        width=TIMELINE_MARKER_SIZE,
        height=TIMELINE_MARKER_SIZE,
        fill_color=_color(palette.accent if event.milestone else palette.primary),
        role='timeline-marker',
    )


def compose_horizontal_timeline(
    events: List[TimelineEvent],
    region: Box,
    theme: ThemeTokens,
    show_dates: bool = True
) -> LayoutSpec:
    _require_region(region, 'compose_horizontal_timeline')
    palette = theme.palette
    caption = theme.typography.font_sizes.caption
    line_y = region.y + region.height / 2

    elements: List[Box] = [Box(
        x=region.x,
        y=line_y,
        width=region.width,
        height=0,
        shape='line',
        line_color=_color(palette.borders.medium),
        line_width=TIMELINE_LINE_WIDTH,
        role='timeline-line',
    )]

    if not events:
        logger.info("No timeline events; emitting axis only")
        return LayoutSpec.for_theme(theme, elements)

    slot_width = region.width / len(events)
    half_marker = TIMELINE_MARKER_SIZE / 2

    for index, event in enumerate(events):
        slot_x = region.x + index * slot_width
        center_x = slot_x + slot_width / 2

        elements.append(_timeline_marker(theme, event, center_x - half_marker, line_y - half_marker))
        elements.append(_text(
            theme, slot_x, line_y - TIMELINE_TITLE_OFFSET, slot_width, TIMELINE_TITLE_HEIGHT,
            event.title, caption, palette.text.primary,
            bold=event.milestone, align='center', valign='bottom', role='timeline-title',
        ))
        if show_dates:
            elements.append(_text(
                theme, slot_x, line_y + TIMELINE_DATE_OFFSET, slot_width, TIMELINE_DATE_HEIGHT,
                event.date, caption, palette.text.secondary,
                align='center', role='timeline-date',
            ))

    logger.debug(f"Horizontal timeline: {len(events)} events, slot width {slot_width:.2f}in")
    return LayoutSpec.for_theme(theme, elements)


def compose_vertical_timeline(
    events: List[TimelineEvent],
    region: Box,
    theme: ThemeTokens,
    show_dates: bool = True,
    show_descriptions: bool = False
) -> LayoutSpec:
    _require_region(region, 'compose_vertical_timeline')
    palette = theme.palette
    caption = theme.typography.font_sizes.caption
    line_x = region.x + TIMELINE_VERTICAL_LINE_OFFSET

    elements: List[Box] = [Box(
        x=line_x,
        y=region.y,
        width=0,
        height=region.height,
        shape='line',
        line_color=_color(palette.borders.medium),
        line_width=TIMELINE_LINE_WIDTH,
        role='timeline-line',
    )]

    if not events:
        logger.info("No timeline events; emitting axis only")
        return LayoutSpec.for_theme(theme, elements)

    slot_height = region.height / len(events)
    half_marker = TIMELINE_MARKER_SIZE / 2
    text_x = line_x + TIMELINE_VERTICAL_TEXT_GAP
    text_width = region.width - 2 * TIMELINE_VERTICAL_TEXT_GAP

    for index, event in enumerate(events):
        center_y = region.y + index * slot_height + slot_height / 2
        slot_bottom = region.y + (index + 1) * slot_height

        elements.append(_timeline_marker(theme, event, line_x - half_marker, center_y - half_marker))
        elements.append(_text(
            theme, text_x, center_y - TIMELINE_VERTICAL_TITLE_HEIGHT / 2, text_width,
            TIMELINE_VERTICAL_TITLE_HEIGHT, event.title, caption, palette.text.primary,
            bold=event.milestone, role='timeline-title',
        ))

        next_y = center_y + TIMELINE_VERTICAL_TITLE_HEIGHT / 2
        if show_dates:
            elements.append(_text(
                theme, text_x, next_y, text_width, TIMELINE_VERTICAL_DATE_HEIGHT,
                event.date, caption, palette.text.secondary,
                italic=True, role='timeline-date',
            ))
            next_y += TIMELINE_VERTICAL_DATE_HEIGHT

        if show_descriptions and event.description:
            elements.append(_text(
                theme, text_x, next_y, text_width, slot_bottom - next_y,
                event.description, caption, palette.text.secondary,
                role='timeline-description',
            ))

    logger.debug(f"Vertical timeline: {len(events)} events, slot height {slot_height:.2f}in")
    return LayoutSpec.for_theme(theme, elements)


#==============================================================================
# TABLES
#==============================================================================

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_table_number(value: Union[int, float]) -> str:
    """Abbreviate large numbers (1.2M, 3.4K); integers as-is, otherwise 2 decimals."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def detect_text_alignment(text: str) -> Literal['left', 'center', 'right']:
    """Right for numeric-looking text, center for short code-like tokens, else left."""
    if _NUMERIC_TEXT.match(text.strip()):
        return 'right'
    if len(text) <= 5 and _CODE_TOKEN.match(text):
        return 'center'
    return 'left'


def _cell_text_and_alignment(cell: TableCell, options: TableOptions):
    if _is_number(cell):
        return format_table_number(cell), 'right'
    text = str(cell)
    if options.text_align != 'auto':
        return text, options.text_align
    return text, detect_text_alignment(text)


def compose_smart_table(
    table: TableSpec,
    region: Box,
    theme: ThemeTokens,
    options: Optional[TableOptions] = None
) -> LayoutSpec:
    """Grid of cell text blocks with a bold header row and numeric-aware alignment."""
    options = options or TableOptions()
    _require_region(region, 'compose_smart_table')
    palette = theme.palette

    column_count = max([len(table.headers)] + [len(row) for row in table.rows])
    if column_count == 0:
        logger.info("Table has no headers or rows; emitting empty fragment")
        return LayoutSpec.for_theme(theme)

    row_count = len(table.rows) + (1 if table.headers else 0)
    column_width = region.width / column_count
    row_height = region.height / row_count
    font_size = theme.typography.font_sizes.caption

    elements: List[Box] = []
    y = region.y

    if table.headers:
        for col in range(column_count):
            header = table.headers[col] if col < len(table.headers) else ''
            elements.append(_text(
                theme, region.x + col * column_width, y, column_width, row_height,
                header, font_size, palette.text.primary,
                bold=True, align='center', valign='middle',
                fill_color=_color(palette.surface),
                line_color=_color(palette.borders.light),
                line_width=1,
                role='table-header',
            ))
        y += row_height

    for row_index, row in enumerate(table.rows):
        if len(row) < column_count:
            logger.debug(f"Padding table row {row_index} from {len(row)} to {column_count} cells")
        padded = list(row) + [''] * (column_count - len(row))
        striped = options.alternating_rows and row_index % 2 == 1

        for col, cell in enumerate(padded):
            text, align = _cell_text_and_alignment(cell, options)
            style: Dict[str, Any] = {'line_color': _color(palette.borders.light), 'line_width': 1}
            if striped:
                style['fill_color'] = _color(palette.surface)
            elements.append(_text(
                theme, region.x + col * column_width, y, column_width, row_height,
                text, font_size, palette.text.primary,
                align=align, valign='middle', role='table-cell', **style
            ))
        y += row_height

    logger.debug(f"Table: {row_count} rows x {column_count} columns")
    return LayoutSpec.for_theme(theme, elements)


#==============================================================================
# CHARTS
#==============================================================================

def generate_gradient_colors(base_color: str, count: int = CHART_LADDER_SIZE) -> List[str]:
    return [base_color] + [shade(base_color, i * 20 - 60) for i in range(1, count)]


def generate_monochrome_colors(base_color: str, count: int = CHART_LADDER_SIZE) -> List[str]:
    return [shade(base_color, i * 15 - 45) for i in range(count)]


def get_chart_colors(theme: ThemeTokens, scheme: ColorScheme = 'theme') -> List[str]:
    """Series colors for a configured scheme; never inferred from the data."""
    palette = theme.palette
    if scheme == 'gradient':
        return generate_gradient_colors(palette.primary)
    if scheme == 'monochrome':
        return generate_monochrome_colors(palette.primary)
    if scheme == 'vibrant':
        return list(VIBRANT_CHART_COLORS)
    return [palette.primary, palette.secondary, palette.accent] + THEME_CHART_EXTRAS


def prepare_chart_series(
    series_list: List[ChartSeries],
    theme: ThemeTokens,
    scheme: ColorScheme = 'theme'
) -> List[ChartSeries]:
    """Assign a color to every series and round percentage/currency values."""
    colors = get_chart_colors(theme, scheme)
    prepared = []
    for index, series in enumerate(series_list):
        values = series.values
        if series.format in ('percentage', 'currency'):
            values = [round(value, 2) for value in values]
        prepared.append(series.model_copy(update={
            'color': series.color or colors[index % len(colors)],
            'values': values,
        }))
    return prepared


def compose_chart(
    series_list: List[ChartSeries],
    region: Box,
    theme: ThemeTokens,
    options: Optional[ChartOptions] = None
) -> LayoutSpec:
    """Chart title, plot area, legend and subtitle. The writer draws the series into the plot box."""
    options = options or ChartOptions()
    _require_region(region, 'compose_chart')
    palette = theme.palette
    sizes = theme.typography.font_sizes

    elements: List[Box] = []
    top = region.y
    bottom = region.bottom

    if options.title:
        elements.append(_text(
            theme, region.x, top, region.width, CHART_TITLE_HEIGHT,
            options.title, sizes.h2, palette.text.primary,
            heading=True, bold=True, align='center', role='chart-title',
        ))
        top += CHART_TITLE_HEIGHT

    if options.subtitle:
        bottom -= CHART_SUBTITLE_HEIGHT

    series = prepare_chart_series(series_list, theme, options.color_scheme)
    if not series:
        logger.info("Chart has no series; emitting plot area only")

    show_legend = options.show_legend and bool(series)
    legend_y = bottom - CHART_LEGEND_HEIGHT
    if show_legend:
        bottom = legend_y

    elements.append(Box(
        x=region.x,
        y=top,
        width=region.width,
        height=_require_size(region.width, bottom - top, 'chart-plot')[1],
        line_color=_color(palette.borders.light),
        line_width=1,
        role='chart-plot',
    ))

    if show_legend:
        entry_width = region.width / len(series)
        label_offset = CHART_LEGEND_SWATCH + 0.05
        for index, entry in enumerate(series):
            entry_x = region.x + index * entry_width
            elements.append(Box(
                x=entry_x,
                y=legend_y + (CHART_LEGEND_HEIGHT - CHART_LEGEND_SWATCH) / 2,
                width=CHART_LEGEND_SWATCH,
                height=CHART_LEGEND_SWATCH,
                fill_color=_color(entry.color),
                role='chart-legend-swatch',
            ))
            elements.append(_text(
                theme, entry_x + label_offset, legend_y, entry_width - label_offset, CHART_LEGEND_HEIGHT,
                entry.name, sizes.caption, palette.text.secondary,
                valign='middle', role='chart-legend-label',
            ))

    if options.subtitle:
        elements.append(_text(
            theme, region.x, region.bottom - CHART_SUBTITLE_HEIGHT, region.width, CHART_SUBTITLE_HEIGHT,
            options.subtitle, sizes.caption, palette.text.secondary,
            italic=True, align='center', role='chart-subtitle',
        ))

    logger.debug(f"Chart ({options.chart_type}, {options.color_scheme}): {len(series)} series")
    return LayoutSpec.for_theme(theme, elements)


#==============================================================================
# CALLOUTS & CARDS
#==============================================================================

def get_callout_colors(callout_type: CalloutType, theme: ThemeTokens) -> Dict[str, str]:
    """Background, border, accent and text colors for a callout severity."""
    semantic = theme.palette.semantic
    base = {
        'info': semantic.info,
        'warning': semantic.warning,
        'success': semantic.success,
        'error': semantic.error,
        'tip': theme.palette.accent,
    }.get(callout_type, semantic.info)

    background = tint(base, CALLOUT_BACKGROUND_TINT)
    return {
        'background': background,
        'border': base,
        'accent': base,
        'text': ensure_contrast(theme.palette.text.primary, background).color,
    }


def compose_callout(callout: CalloutSpec, region: Box, theme: ThemeTokens) -> LayoutSpec:
    _require_region(region, 'compose_callout')
    colors = get_callout_colors(callout.type, theme)
    sizes = theme.typography.font_sizes

    elements: List[Box] = [
        Box(
            x=region.x,
            y=region.y,
            width=region.width,
            height=region.height,
            fill_color=_color(colors['background']),
            line_color=_color(colors['border']),
            line_width=CALLOUT_BORDER_WIDTH,
            role='callout-background',
        ),
        Box(
            x=region.x,
            y=region.y,
            width=CALLOUT_ACCENT_WIDTH,
            height=region.height,
            fill_color=_color(colors['accent']),
            role='callout-accent',
        ),
    ]

    content_x = region.x + CALLOUT_PADDING_LEFT
    content_width = region.width - CALLOUT_PADDING_LEFT - CALLOUT_PADDING_RIGHT
    content_y = region.y + CALLOUT_PADDING_TOP

    if callout.title:
        elements.append(_text(
            theme, content_x, content_y, content_width, CALLOUT_TITLE_HEIGHT,
            callout.title, sizes.body, colors['text'],
            heading=True, bold=True, role='callout-title',
        ))
        content_y += CALLOUT_TITLE_ADVANCE

    elements.append(_text(
        theme, content_x, content_y, content_width, region.bottom - content_y - CALLOUT_PADDING_TOP,
        callout.content, sizes.body, colors['text'],
        role='callout-body',
    ))
    return LayoutSpec.for_theme(theme, elements)


def _card_frame(region: Box, theme: ThemeTokens, accent: Dict[str, float]) -> List[Box]:
    palette = theme.palette
    return [
        Box(
            x=region.x,
            y=region.y,
            width=region.width,
            height=region.height,
            fill_color=_color(palette.surface),
            line_color=_color(palette.borders.light),
            line_width=1,
            role='card-background',
        ),
        Box(fill_color=_color(palette.primary), role='card-accent', **accent),
    ]


def compose_feature_card(card: FeatureCardSpec, region: Box, theme: ThemeTokens) -> LayoutSpec:
    """Card with a top accent strip, centered title, description and as many bullets as fit."""
    _require_region(region, 'compose_feature_card')
    palette = theme.palette
    sizes = theme.typography.font_sizes

    elements = _card_frame(region, theme, {
        'x': region.x, 'y': region.y, 'width': region.width, 'height': CARD_ACCENT_HEIGHT,
    })

    content_x = region.x + CARD_PADDING
    content_width = region.width - 2 * CARD_PADDING
    y = region.y + CARD_ACCENT_HEIGHT + CARD_INNER_PADDING

    elements.append(_text(
        theme, content_x, y, content_width, CARD_TITLE_HEIGHT,
        card.title, sizes.h2, palette.text.primary,
        heading=True, bold=True, align='center', role='card-title',
    ))
    y += CARD_TITLE_HEIGHT + CARD_ACCENT_HEIGHT

    if card.description:
        elements.append(_text(
            theme, content_x, y, content_width, CARD_DESCRIPTION_HEIGHT,
            card.description, sizes.body, palette.text.secondary,
            align='center', role='card-description',
        ))
        y += CARD_DESCRIPTION_HEIGHT + CARD_ACCENT_HEIGHT

    limit = region.bottom - CARD_ACCENT_HEIGHT
    placed = 0
    for feature in card.features:
        if y + CARD_FEATURE_ROW > limit:
            break
        elements.append(Box(
            x=content_x,
            y=y + (CARD_FEATURE_ROW - CARD_BULLET_SIZE) / 2,
            width=CARD_BULLET_SIZE,
            height=CARD_BULLET_SIZE,
            shape='ellipse',
            fill_color=_color(palette.accent),
            role='card-bullet',
        ))
        elements.append(_text(
            theme, content_x + CARD_INNER_PADDING, y, content_width - CARD_INNER_PADDING, CARD_FEATURE_ROW,
            feature, sizes.caption, palette.text.primary,
            valign='middle', role='card-feature',
        ))
        y += CARD_FEATURE_ROW
        placed += 1

    if placed < len(card.features):
        logger.info(f"Feature card '{card.title}': {len(card.features) - placed} features did not fit")
    return LayoutSpec.for_theme(theme, elements)


def compose_metric_card(metric: MetricCardSpec, region: Box, theme: ThemeTokens) -> LayoutSpec:
    """Card with a left accent bar, a large value, its label and an optional description."""
    _require_region(region, 'compose_metric_card')
    palette = theme.palette
    sizes = theme.typography.font_sizes

    elements = _card_frame(region, theme, {
        'x': region.x, 'y': region.y, 'width': CARD_ACCENT_HEIGHT, 'height': region.height,
    })

    value = format_table_number(metric.value) if _is_number(metric.value) else str(metric.value)
    value_color = ensure_contrast(palette.primary, palette.surface).color

    content_x = region.x + CARD_ACCENT_HEIGHT + CARD_PADDING
    content_width = region.width - CARD_ACCENT_HEIGHT - 2 * CARD_PADDING
    inner_top = region.y + CARD_INNER_PADDING
    inner_height = _require_size(content_width, region.height - 2 * CARD_INNER_PADDING, 'metric-card')[1]
    value_height = inner_height * 0.5
    label_height = inner_height * (0.25 if metric.description else 0.5)

    elements.append(_text(
        theme, content_x, inner_top, content_width, value_height,
        value, sizes.h1, value_color,
        heading=True, bold=True, valign='bottom', role='metric-value',
    ))
    elements.append(_text(
        theme, content_x, inner_top + value_height, content_width, label_height,
        metric.label, sizes.body, palette.text.primary,
        role='metric-label',
    ))
    if metric.description:
        elements.append(_text(
            theme, content_x, inner_top + value_height + label_height, content_width,
            inner_height - value_height - label_height,
            metric.description, sizes.caption, palette.text.secondary,
            role='metric-description',
        ))
    return LayoutSpec.for_theme(theme, elements)


#==============================================================================
# PROCESS FLOW
#==============================================================================

def _step_number(theme: ThemeTokens, step: ProcessStep, x: float, y: float, number_color: str) -> List[Box]:
    return [
        Box(
            x=x,
            y=y,
            width=PROCESS_CIRCLE_SIZE,
            height=PROCESS_CIRCLE_SIZE,
            shape='ellipse',
            fill_color=_color(theme.palette.primary),
            role='process-step',
        ),
        _text(
            theme, x, y, PROCESS_CIRCLE_SIZE, PROCESS_CIRCLE_SIZE,
            str(step.number), theme.typography.font_sizes.body, number_color,
            bold=True, align='center', valign='middle', role='process-number',
        ),
    ]


def compose_process_flow(
    steps: List[ProcessStep],
    region: Box,
    theme: ThemeTokens,
    orientation: Literal['horizontal', 'vertical'] = 'horizontal'
) -> LayoutSpec:
    """Numbered steps joined by arrows, laid out across or down the region."""
    _require_region(region, 'compose_process_flow')
    if not steps:
        logger.info("Process flow has no steps; emitting empty fragment")
        return LayoutSpec.for_theme(theme)

    palette = theme.palette
    sizes = theme.typography.font_sizes
    number_color = get_readable_text_color(palette.primary)['recommended']
    count = len(steps)
    elements: List[Box] = []

    if orientation == 'vertical':
        step_height = _require_size(
            region.width, (region.height - (count - 1) * PROCESS_STEP_GAP) / count, 'process-step',
        )[1]
        text_x = region.x + PROCESS_CIRCLE_SIZE + CARD_PADDING
        text_width = region.width - PROCESS_CIRCLE_SIZE - CARD_PADDING

        for index, step in enumerate(steps):
            step_y = region.y + index * (step_height + PROCESS_STEP_GAP)
            elements.extend(_step_number(theme, step, region.x, step_y, number_color))
            elements.append(_text(
                theme, text_x, step_y, text_width, PROCESS_TITLE_HEIGHT,
                step.title, sizes.body, palette.text.primary,
                bold=True, role='process-title',
            ))
            if step.description:
                elements.append(_text(
                    theme, text_x, step_y + PROCESS_TITLE_HEIGHT, text_width,
                    step_height - PROCESS_TITLE_HEIGHT,
                    step.description, sizes.caption, palette.text.secondary,
                    role='process-description',
                ))
            if index < count - 1:
                elements.append(Box(
                    x=region.x + (PROCESS_CIRCLE_SIZE - PROCESS_ARROW_SIZE) / 2,
                    y=step_y + step_height + (PROCESS_STEP_GAP - PROCESS_ARROW_SIZE) / 2,
                    width=PROCESS_ARROW_SIZE,
                    height=PROCESS_ARROW_SIZE,
                    shape='arrow',
                    fill_color=_color(palette.accent),
                    role='process-arrow',
                ))
    else:
        step_width = _require_size(
            (region.width - (count - 1) * PROCESS_STEP_GAP) / count, region.height, 'process-step',
        )[0]
        title_y = region.y + PROCESS_CIRCLE_SIZE + CARD_PADDING
        description_y = title_y + PROCESS_TITLE_HEIGHT

        for index, step in enumerate(steps):
            step_x = region.x + index * (step_width + PROCESS_STEP_GAP)
            elements.extend(_step_number(
                theme, step, step_x + (step_width - PROCESS_CIRCLE_SIZE) / 2, region.y, number_color,
            ))
            elements.append(_text(
                theme, step_x, title_y, step_width, PROCESS_TITLE_HEIGHT,
                step.title, sizes.body, palette.text.primary,
                bold=True, align='center', role='process-title',
            ))
            if step.description:
                elements.append(_text(
                    theme, step_x, description_y, step_width, region.bottom - description_y,
                    step.description, sizes.caption, palette.text.secondary,
                    align='center', role='process-description',
                ))
            if index < count - 1:
                elements.append(Box(
                    x=step_x + step_width + (PROCESS_STEP_GAP - PROCESS_ARROW_SIZE) / 2,
                    y=region.y + (PROCESS_CIRCLE_SIZE - PROCESS_ARROW_SIZE) / 2,
                    width=PROCESS_ARROW_SIZE,
                    height=PROCESS_ARROW_SIZE,
                    shape='arrow',
                    fill_color=_color(palette.accent),
                    role='process-arrow',
                ))

    logger.debug(f"Process flow ({orientation}): {count} steps")
    return LayoutSpec.for_theme(theme, elements)
