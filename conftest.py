import os

os.environ.setdefault("SLIDEKIT_ENV", "development")

import pytest

from slidekit.models import ThemeTokens


NEUTRAL_PALETTE = {
    "primary": "#2563EB",
    "secondary": "#64748B",
    "accent": "#0EA5E9",
    "background": "#FFFFFF",
    "surface": "#F8FAFC",
    "text": {"primary": "#0F172A", "secondary": "#475569"},
    "borders": {"light": "#E2E8F0", "medium": "#CBD5E1"},
    "semantic": {"success": "#10B981", "warning": "#F59E0B", "error": "#EF4444", "info": "#3B82F6"},
}

EXECUTIVE_PALETTE = {
    "primary": "#F8FAFC",
    "secondary": "#94A3B8",
    "accent": "#3B82F6",
    "background": "#0F172A",
    "surface": "#1E293B",
    "text": {"primary": "#F8FAFC", "secondary": "#CBD5E1"},
    "borders": {"light": "#334155", "medium": "#475569"},
    "semantic": {"success": "#22C55E", "warning": "#FCD34D", "error": "#F87171", "info": "#60A5FA"},
}


def make_theme(palette=None, name="neutral", **layout_overrides) -> ThemeTokens:
    """Theme payload in the camelCase shape upstream services send."""
    layout = {
        "slideWidth": 10.0,
        "slideHeight": 5.625,
        "safeMargin": 0.5,
        "gridColumns": 12,
        "gridGutter": 0.25,
    }
    layout.update(layout_overrides)
    return ThemeTokens.model_validate({
        "name": name,
        "palette": palette or NEUTRAL_PALETTE,
        "typography": {
            "fontSizes": {"h1": 36, "h2": 28, "body": 18, "caption": 14},
            "fontFamilies": {"heading": "Calibri", "body": "Calibri"},
        },
        "spacing": {"xs": 0.056, "sm": 0.111, "md": 0.167, "lg": 0.222, "xl": 0.333},
        "layout": layout,
    })


@pytest.fixture
def neutral_theme():
    return make_theme()


@pytest.fixture
def executive_theme():
    return make_theme(EXECUTIVE_PALETTE, name="executive")


@pytest.fixture
def theme_factory():
    return make_theme
