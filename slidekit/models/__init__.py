"""
Value types shared by the composer and the validator.
"""

from slidekit.models.geometry import (
    Box,
    TextBlock,
    LayoutElement,
    LayoutSpec,
    create_box,
    create_text_block,
)
from slidekit.models.theme import (
    ThemeTokens,
    Palette,
    TextColors,
    BorderColors,
    SemanticColors,
    Typography,
    FontSizes,
    FontFamilies,
    SpacingScale,
    LayoutConstants,
)
from slidekit.models.content import (
    TimelineEvent,
    TimelineOptions,
    ChartSeries,
    ChartOptions,
    TableSpec,
    TableOptions,
    CalloutSpec,
    FeatureCardSpec,
    MetricCardSpec,
    ProcessStep,
    BuildMetadata,
    SlideBuildResult,
)
from slidekit.models.validation import (
    IssueType,
    IssueCategory,
    IssueSeverity,
    StyleIssue,
    Subscores,
    ValidationResult,
    RuleResult,
)

__all__ = [
    'Box',
    'TextBlock',
    'LayoutElement',
    'LayoutSpec',
    'create_box',
    'create_text_block',
    'ThemeTokens',
    'Palette',
    'TextColors',
    'BorderColors',
    'SemanticColors',
    'Typography',
    'FontSizes',
    'FontFamilies',
    'SpacingScale',
    'LayoutConstants',
    'TimelineEvent',
    'TimelineOptions',
    'ChartSeries',
    'ChartOptions',
    'TableSpec',
    'TableOptions',
    'CalloutSpec',
    'FeatureCardSpec',
    'MetricCardSpec',
    'ProcessStep',
    'BuildMetadata',
    'SlideBuildResult',
    'IssueType',
    'IssueCategory',
    'IssueSeverity',
    'StyleIssue',
    'Subscores',
    'ValidationResult',
    'RuleResult',
]
