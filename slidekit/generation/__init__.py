"""
Composition and validation components package.
"""

from slidekit.generation.layout_composer import (
    compose_timeline,
    compose_horizontal_timeline,
    compose_vertical_timeline,
    compose_smart_table,
    compose_chart,
    compose_callout,
    compose_feature_card,
    compose_metric_card,
    compose_process_flow,
    get_chart_colors,
    get_callout_colors,
    prepare_chart_series,
    format_table_number,
    detect_text_alignment,
)
from slidekit.generation.style_validator import (
    validate_layout_spec,
    validate_slide_build_result,
    generate_layout_suggestions,
    generate_style_quality_report,
    calculate_grade,
)
from slidekit.generation.slide_builder import SlideBuilder, SlideRequest

__all__ = [
    'compose_timeline',
    'compose_horizontal_timeline',
    'compose_vertical_timeline',
    'compose_smart_table',
    'compose_chart',
    'compose_callout',
    'compose_feature_card',
    'compose_metric_card',
    'compose_process_flow',
    'get_chart_colors',
    'get_callout_colors',
    'prepare_chart_series',
    'format_table_number',
    'detect_text_alignment',
    'validate_layout_spec',
    'validate_slide_build_result',
    'generate_layout_suggestions',
    'generate_style_quality_report',
    'calculate_grade',
    'SlideBuilder',
    'SlideRequest',
]
