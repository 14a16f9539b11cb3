"""
Slide builder: lays out a title band, hands the remaining content region to
the composer for the requested visual, and records build warnings/errors for
validation.
"""

from typing import Callable, Dict, List, Optional, Tuple

from pydantic import Field

from slidekit.config.engine_config import (
    MAX_TITLE_LENGTH,
    SUBTITLE_BAND_HEIGHT,
    TIMELINE_HEADING_GAP,
    TITLE_BAND_HEIGHT,
)
from slidekit.exceptions import CompositionError, LayoutContractError
from slidekit.generation.layout_composer import (
    compose_callout,
    compose_chart,
    compose_feature_card,
    compose_metric_card,
    compose_process_flow,
    compose_smart_table,
    compose_timeline,
)
from slidekit.generation.layout_grid import (
    GridConfig,
    content_region,
    create_multi_column_layout,
    equal_columns,
)
from slidekit.generation.style_validator import validate_slide_build_result
from slidekit.models.base import EngineModel
from slidekit.models.content import (
    CalloutSpec,
    ChartOptions,
    ChartSeries,
    FeatureCardSpec,
    MetricCardSpec,
    ProcessStep,
    SlideBuildResult,
    TableOptions,
    TableSpec,
    TimelineEvent,
    TimelineOptions,
)
from slidekit.models.geometry import Box, LayoutSpec, TextBlock
from slidekit.models.theme import ThemeTokens
from slidekit.models.validation import ValidationResult
from slidekit.setup_logging_optimized import get_logger

logger = get_logger(__name__)

VISUAL_TYPES = ('timeline', 'table', 'chart', 'callout', 'feature_cards', 'metric_cards', 'process')


class SlideRequest(EngineModel):
    """One slide: a title, an optional subtitle and exactly one visual."""
    title: str
    subtitle: Optional[str] = None
    visual: str = Field(description=f"One of {', '.join(VISUAL_TYPES)}")

    timeline: List[TimelineEvent] = Field(default_factory=list)
    timeline_options: TimelineOptions = Field(default_factory=TimelineOptions)
    table: TableSpec = Field(default_factory=TableSpec)
    table_options: TableOptions = Field(default_factory=TableOptions)
    chart: List[ChartSeries] = Field(default_factory=list)
    chart_options: ChartOptions = Field(default_factory=ChartOptions)
    callout: Optional[CalloutSpec] = None
    feature_cards: List[FeatureCardSpec] = Field(default_factory=list)
    metric_cards: List[MetricCardSpec] = Field(default_factory=list)
    process: List[ProcessStep] = Field(default_factory=list)
    process_orientation: str = 'horizontal'

    def visual_is_empty(self) -> bool:
        if self.visual == 'table':
            return not self.table.rows
        if self.visual == 'callout':
            return self.callout is None or not self.callout.content
        return not getattr(self, self.visual, None)


class SlideBuilder:
    """Builds single slides against one read-only theme. Calls are independent."""

    def __init__(self, theme: ThemeTokens):
        self.theme = theme
        self.grid = GridConfig.from_theme(theme)
        self._composers: Dict[str, Callable[[SlideRequest, Box], Tuple[LayoutSpec, int]]] = {
            'timeline': self._compose_timeline,
            'table': self._compose_table,
            'chart': self._compose_chart,
            'callout': self._compose_callout,
            'feature_cards': self._compose_feature_cards,
            'metric_cards': self._compose_metric_cards,
            'process': self._compose_process,
        }
        logger.info(f"✅ SlideBuilder initialized for theme {theme.name or 'unnamed'}")

    def build(self, request: SlideRequest) -> SlideBuildResult:
        composer = self._composers.get(request.visual)
        if composer is None:
            raise CompositionError(
                f"Unsupported visual type: {request.visual}",
                context={'supported': list(VISUAL_TYPES), 'title': request.title},
            )

        warnings: List[str] = []
        errors: List[str] = []

        header, visual_top = self._compose_header(request)
        region = content_region(self.theme)

        if len(request.title) > MAX_TITLE_LENGTH:
            warnings.append(
                f"Title is {len(request.title)} characters; keep it under {MAX_TITLE_LENGTH} for slide display"
            )
        if request.visual_is_empty():
            warnings.append(f"No content supplied for the {request.visual} visual")

        available = region.bottom - visual_top
        if available <= 0:
            errors.append(f"No vertical space left for the {request.visual} visual")
            logger.warning(f"Slide '{request.title}': title band leaves no room for the visual")
            return SlideBuildResult.from_layout(header, warnings, errors)

        visual_region = Box(
            x=region.x,
            y=visual_top,
            width=region.width,
            height=available,
            role='visual-region',
        )
        try:
            fragment, overflow = composer(request, visual_region)
        except LayoutContractError as e:
            errors.append(f"The {request.visual} visual does not fit its region: {e.args[0]}")
            logger.warning(f"Slide '{request.title}': {e}")
            return SlideBuildResult.from_layout(header, warnings, errors)
        if overflow:
            warnings.append(f"{overflow} characters of {request.visual} content did not fit")

        layout = header.combined_with(fragment)
        logger.info(
            f"Built slide '{request.title}' ({request.visual}): "
            f"{len(layout.content)} elements, {len(warnings)} warnings"
        )
        return SlideBuildResult.from_layout(layout, warnings, errors, overflow_text=overflow)

    def build_and_validate(self, request: SlideRequest) -> Tuple[SlideBuildResult, ValidationResult]:
        result = self.build(request)
        return result, validate_slide_build_result(result, self.theme)

    def _compose_header(self, request: SlideRequest) -> Tuple[LayoutSpec, float]:
        """Title (and subtitle) band at the top of the content region; returns the next free y."""
        theme = self.theme
        region = content_region(theme)
        families = theme.typography.font_families
        sizes = theme.typography.font_sizes
        gap = theme.spacing.sm

        elements = [TextBlock(
            x=region.x,
            y=region.y,
            width=region.width,
            height=TITLE_BAND_HEIGHT,
            text=request.title,
            font_size=sizes.h1,
            color=theme.palette.text.primary,
            bold=True,
            valign='bottom',
            font_family=families.heading,
            role='slide-title',
        )]
        y = region.y + TITLE_BAND_HEIGHT + gap

        if request.subtitle:
            elements.append(TextBlock(
                x=region.x,
                y=y,
                width=region.width,
                height=SUBTITLE_BAND_HEIGHT,
                text=request.subtitle,
                font_size=sizes.h2,
                color=theme.palette.text.secondary,
                font_family=families.body,
                role='slide-subtitle',
            ))
            y += SUBTITLE_BAND_HEIGHT + gap

        return LayoutSpec.for_theme(theme, elements), y

    def _compose_timeline(self, request: SlideRequest, region: Box) -> Tuple[LayoutSpec, int]:
        if request.timeline_options.title:
            # Heading sits above the region
            height = region.height - TIMELINE_HEADING_GAP
            if height < 0:
                raise LayoutContractError(
                    "Region too small for timeline-heading",
                    context={'height': region.height, 'heading_gap': TIMELINE_HEADING_GAP},
                )
            region = region.model_copy(update={'y': region.y + TIMELINE_HEADING_GAP, 'height': height})
        return compose_timeline(request.timeline, region, self.theme, request.timeline_options), 0

    def _compose_table(self, request: SlideRequest, region: Box) -> Tuple[LayoutSpec, int]:
        return compose_smart_table(request.table, region, self.theme, request.table_options), 0

    def _compose_chart(self, request: SlideRequest, region: Box) -> Tuple[LayoutSpec, int]:
        return compose_chart(request.chart, region, self.theme, request.chart_options), 0

    def _compose_callout(self, request: SlideRequest, region: Box) -> Tuple[LayoutSpec, int]:
        return compose_callout(request.callout or CalloutSpec(), region, self.theme), 0

    def _card_regions(self, count: int, region: Box) -> List[Box]:
        columns = equal_columns(count, self.grid)
        return create_multi_column_layout(
            columns, self.grid, region.height, y_offset=region.y - self.grid.margin_top
        )

    def _compose_cards(self, cards: list, region: Box, compose, describe) -> Tuple[LayoutSpec, int]:
        """One card per grid column; cards beyond the column count are dropped."""
        placed = cards[:self.grid.columns]
        dropped = cards[self.grid.columns:]
        overflow = sum(len(describe(card)) for card in dropped)
        if dropped:
            logger.info(f"Dropped {len(dropped)} cards beyond {self.grid.columns} grid columns")

        layout = LayoutSpec.for_theme(self.theme)
        for card, card_region in zip(placed, self._card_regions(len(placed), region)):
            layout = layout.combined_with(compose(card, card_region, self.theme))
        return layout, overflow

    def _compose_feature_cards(self, request: SlideRequest, region: Box) -> Tuple[LayoutSpec, int]:
        return self._compose_cards(
            request.feature_cards, region, compose_feature_card,
            lambda card: card.title + card.description + ''.join(card.features),
        )

    def _compose_metric_cards(self, request: SlideRequest, region: Box) -> Tuple[LayoutSpec, int]:
        return self._compose_cards(
            request.metric_cards, region, compose_metric_card,
            lambda card: f"{card.value}{card.label}{card.description or ''}",
        )

    def _compose_process(self, request: SlideRequest, region: Box) -> Tuple[LayoutSpec, int]:
        orientation = 'vertical' if request.process_orientation == 'vertical' else 'horizontal'
        return compose_process_flow(request.process, region, self.theme, orientation), 0
