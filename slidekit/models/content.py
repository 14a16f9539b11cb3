"""
Content requests handed to the composer, and the build result the
orchestrator hands to validation.
"""

from typing import List, Literal, Optional, Union

from pydantic import Field

from slidekit.models.base import EngineModel
from slidekit.models.geometry import LayoutSpec


class TimelineEvent(EngineModel):
    id: str
    title: str
    date: str
    description: Optional[str] = None
    milestone: bool = False
    status: Optional[Literal['completed', 'in-progress', 'planned', 'cancelled']] = None


class TimelineOptions(EngineModel):
    orientation: Literal['horizontal', 'vertical'] = 'horizontal'
    show_dates: bool = True
    show_descriptions: bool = False
    title: Optional[str] = None


class ChartSeries(EngineModel):
    name: str
    labels: List[str] = Field(default_factory=list)
    values: List[float] = Field(default_factory=list)
    format: Optional[Literal['number', 'percentage', 'currency']] = None
    color: Optional[str] = None


ColorScheme = Literal['theme', 'gradient', 'monochrome', 'vibrant']


class ChartOptions(EngineModel):
    chart_type: Literal['bar', 'column', 'line', 'pie', 'doughnut', 'area', 'scatter'] = 'bar'
    color_scheme: ColorScheme = 'theme'
    title: Optional[str] = None
    subtitle: Optional[str] = None
    show_legend: bool = True


TableCell = Union[int, float, str]


class TableSpec(EngineModel):
    headers: List[str] = Field(default_factory=list)
    rows: List[List[TableCell]] = Field(default_factory=list)


class TableOptions(EngineModel):
    alternating_rows: bool = True
    text_align: Literal['auto', 'left', 'center', 'right'] = 'auto'


CalloutType = Literal['info', 'warning', 'success', 'error', 'tip']


class CalloutSpec(EngineModel):
    type: CalloutType = 'info'
    title: Optional[str] = None
    content: str = ''


class FeatureCardSpec(EngineModel):
    title: str
    description: str = ''
    features: List[str] = Field(default_factory=list)


class MetricCardSpec(EngineModel):
    value: Union[str, float, int]
    label: str
    description: Optional[str] = None


class ProcessStep(EngineModel):
    number: int
    title: str
    description: str = ''


class BuildMetadata(EngineModel):
    """Bookkeeping produced while composing a slide."""
    used_text: int = 0
    overflow_text: int = 0
    shape_count: int = 0
    warnings: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


class SlideBuildResult(EngineModel):
    layout: LayoutSpec
    metadata: BuildMetadata = Field(default_factory=BuildMetadata)

    @classmethod
    def from_layout(
        cls,
        layout: LayoutSpec,
        warnings: Optional[List[str]] = None,
        errors: Optional[List[str]] = None,
        overflow_text: int = 0
    ) -> "SlideBuildResult":
        """Derive text and shape counts from the composed layout."""
        used_text = sum(len(block.text) for block in layout.text_blocks())
        return cls(
            layout=layout,
            metadata=BuildMetadata(
                used_text=used_text,
                overflow_text=overflow_text,
                shape_count=len(layout.content),
                warnings=list(warnings or []),
                errors=list(errors or []),
            ),
        )
