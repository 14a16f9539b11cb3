"""
Configuration constants for the composition and validation engine.
"""

from typing import Dict, List

#==============================================================================
# COLOR SCIENCE
#==============================================================================

WCAG_AA_RATIO = 4.5
WCAG_AAA_RATIO = 7.0

# Luminance below which a color counts as "dark" for text selection
DARK_COLOR_LUMINANCE = 0.179

# ensure_contrast: lighten when the background luminance is below this value
CONTRAST_LIGHTEN_BELOW = 0.5
CONTRAST_STEP = 0.05
CONTRAST_MAX_STEPS = 100

# lighten() percentages for 50..400, darken() percentages for 600..900
PALETTE_LIGHTEN_STEPS = {50: 40, 100: 30, 200: 20, 300: 10, 400: 5}
PALETTE_DARKEN_STEPS = {600: 10, 700: 20, 800: 30, 900: 40}

STANDARD_TEXT_COLORS = {
    'white': '#FFFFFF',
    'black': '#000000',
    'dark_gray': '#1A202C',
    'light_gray': '#F7FAFC',
    'off_white': '#FAFAFA',
    'charcoal': '#2D3748'
}

#==============================================================================
# CHART PALETTES
#==============================================================================

THEME_CHART_EXTRAS: List[str] = ['#8B5CF6', '#EC4899', '#06B6D4', '#10B981', '#F59E0B']
VIBRANT_CHART_COLORS: List[str] = [
    '#FF6B6B', '#4ECDC4', '#45B7D1', '#96CEB4',
    '#FFEAA7', '#DDA0DD', '#98D8C8', '#F7DC6F'
]
CHART_LADDER_SIZE = 8

#==============================================================================
# COMPOSER GEOMETRY (inches)
#==============================================================================

TIMELINE_MARKER_SIZE = 0.2
TIMELINE_LINE_WIDTH = 2
TIMELINE_VERTICAL_LINE_OFFSET = 0.3
TIMELINE_HEADING_HEIGHT = 0.3
TIMELINE_HEADING_GAP = 0.4
TIMELINE_TITLE_OFFSET = 0.6
TIMELINE_TITLE_HEIGHT = 0.3
TIMELINE_DATE_OFFSET = 0.2
TIMELINE_DATE_HEIGHT = 0.25
TIMELINE_VERTICAL_TEXT_GAP = 0.3
TIMELINE_VERTICAL_TITLE_HEIGHT = 0.3
TIMELINE_VERTICAL_DATE_HEIGHT = 0.2

CALLOUT_ACCENT_WIDTH = 0.1
CALLOUT_PADDING_TOP = 0.15
CALLOUT_PADDING_LEFT = 0.25
CALLOUT_PADDING_RIGHT = 0.15
CALLOUT_TITLE_HEIGHT = 0.4
CALLOUT_TITLE_ADVANCE = 0.5
CALLOUT_BACKGROUND_TINT = 0.9
CALLOUT_BORDER_WIDTH = 2

CARD_ACCENT_HEIGHT = 0.1
CARD_PADDING = 0.2
CARD_FEATURE_ROW = 0.3
CARD_BULLET_SIZE = 0.08
CARD_TITLE_HEIGHT = 0.5
CARD_DESCRIPTION_HEIGHT = 0.8
CARD_INNER_PADDING = 0.15

PROCESS_CIRCLE_SIZE = 0.5
PROCESS_STEP_GAP = 0.3
PROCESS_ARROW_SIZE = 0.2
PROCESS_TITLE_HEIGHT = 0.4

CHART_LEGEND_HEIGHT = 0.3
CHART_LEGEND_SWATCH = 0.15
CHART_TITLE_HEIGHT = 0.4
CHART_SUBTITLE_HEIGHT = 0.3

#==============================================================================
# VALIDATION & SCORING
#==============================================================================

MIN_FONT_SIZE = 12

# Float noise allowed when comparing edges (inches)
GEOMETRY_EPSILON = 1e-9
DENSITY_THRESHOLD = 8

# One table shared by the layout-only and build-result aggregators
SCORING: Dict[str, Dict] = {
    "rule_weights": {
        "safe_margins": 15,
        "overlap": 20,
        "hierarchy": 10,
        "spacing": 10,
        "accessibility": 15,
    },
    "severity_penalties": {
        "critical": 25,
        "major": 10,
        "minor": 5,
    },
    # Ordered high to low; first threshold met wins
    "grade_thresholds": [(90, "A"), (80, "B"), (70, "C"), (60, "D")],
    "failing_grade": "F",
    "pass_score": 70,
    "max_score": 100,
    "min_score": 0,
}

#==============================================================================
# BUILD WARNINGS
#==============================================================================

MAX_TITLE_LENGTH = 80

#==============================================================================
# SLIDE BUILDER
#==============================================================================

TITLE_BAND_HEIGHT = 0.8
SUBTITLE_BAND_HEIGHT = 0.5
