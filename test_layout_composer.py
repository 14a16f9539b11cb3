"""
Tests for composer placement: timelines, tables, charts, callouts, cards and
process flows.
"""

import pytest

from slidekit.exceptions import LayoutContractError
from slidekit.generation.color_science import get_contrast_ratio, safe_color_format, tint
from slidekit.generation.layout_composer import (
    compose_callout,
    compose_chart,
    compose_feature_card,
    compose_horizontal_timeline,
    compose_metric_card,
    compose_process_flow,
    compose_smart_table,
    compose_timeline,
    compose_vertical_timeline,
    detect_text_alignment,
    format_table_number,
    get_callout_colors,
    get_chart_colors,
    prepare_chart_series,
)
from slidekit.models import (
    Box,
    CalloutSpec,
    ChartOptions,
    ChartSeries,
    FeatureCardSpec,
    MetricCardSpec,
    ProcessStep,
    TableOptions,
    TableSpec,
    TimelineEvent,
    TimelineOptions,
)


@pytest.fixture
def region():
    return Box(x=0.5, y=1.5, width=9, height=3)


@pytest.fixture
def events():
    return [
        TimelineEvent(id="1", title="Kickoff", date="Jan"),
        TimelineEvent(id="2", title="Launch", date="Apr", milestone=True, description="GA release"),
        TimelineEvent(id="3", title="Review", date="Jul"),
    ]


def by_role(layout, role):
    return [el for el in layout.content if el.role == role]


#==============================================================================
# TIMELINES
#==============================================================================

def test_horizontal_timeline_places_markers_at_slot_centers(events, region, neutral_theme):
    layout = compose_horizontal_timeline(events, region, neutral_theme)

    assert len(layout.content) == 10
    line = layout.content[0]
    assert line.role == "timeline-line"
    assert line.width == pytest.approx(9)
    assert line.y == pytest.approx(3.0)

    markers = by_role(layout, "timeline-marker")
    assert [m.center[0] for m in markers] == pytest.approx([2.0, 5.0, 8.0])
    assert [m.fill_color for m in markers] == ["2563EB", "0EA5E9", "2563EB"]

    titles = by_role(layout, "timeline-title")
    dates = by_role(layout, "timeline-date")
    assert all(t.bottom <= line.y for t in titles)
    assert all(d.y > line.y for d in dates)
    assert [t.bold for t in titles] == [False, True, False]
    assert all(d.color == "475569" for d in dates)


def test_horizontal_timeline_without_dates(events, region, neutral_theme):
    layout = compose_horizontal_timeline(events, region, neutral_theme, show_dates=False)
    assert len(layout.content) == 7
    assert by_role(layout, "timeline-date") == []


def test_empty_timeline_emits_axis_only(region, neutral_theme):
    layout = compose_timeline([], region, neutral_theme)
    assert [el.role for el in layout.content] == ["timeline-line"]
    assert layout.slide_width == 10


def test_timeline_heading_sits_above_region(events, region, neutral_theme):
    layout = compose_timeline(events, region, neutral_theme, TimelineOptions(title="Roadmap"))
    heading = layout.content[0]
    assert heading.role == "timeline-heading"
    assert heading.y == pytest.approx(1.1)
    assert heading.font_size == 28


def test_vertical_timeline(events, region, neutral_theme):
    layout = compose_vertical_timeline(events, region, neutral_theme, show_descriptions=True)
    line = layout.content[0]
    assert line.x == pytest.approx(0.8)
    assert line.width == 0
    assert line.height == pytest.approx(3)

    markers = by_role(layout, "timeline-marker")
    assert [m.center[1] for m in markers] == pytest.approx([2.0, 3.0, 4.0])
    assert all(m.center[0] == pytest.approx(0.8) for m in markers)

    titles = by_role(layout, "timeline-title")
    assert all(t.x > line.x for t in titles)
    descriptions = by_role(layout, "timeline-description")
    assert [d.text for d in descriptions] == ["GA release"]


def test_compose_timeline_dispatches_on_orientation(events, region, neutral_theme):
    layout = compose_timeline(events, region, neutral_theme, TimelineOptions(orientation="vertical"))
    assert layout.content[0].width == 0


#==============================================================================
# TABLES
#==============================================================================

@pytest.mark.parametrize("value,expected", [
    (1234567, "1.2M"),
    (2500.5, "2.5K"),
    (1000, "1.0K"),
    (999, "999"),
    (42, "42"),
    (5.0, "5"),
    (3.14159, "3.14"),
])
def test_format_table_number(value, expected):
    assert format_table_number(value) == expected


@pytest.mark.parametrize("text,expected", [
    ("$1,234", "right"),
    ("12.5", "right"),
    ("USD", "center"),
    ("Q3-24", "center"),
    ("ABCDEF", "left"),
    ("North", "left"),
    ("", "left"),
])
def test_detect_text_alignment(text, expected):
    assert detect_text_alignment(text) == expected


def test_smart_table_layout(region, neutral_theme):
    table = TableSpec(
        headers=["Region", "Revenue", "Code"],
        rows=[["North", 1234567, "NA"], ["South", 2500.5, "SA-1"], ["West", 42]],
    )
    layout = compose_smart_table(table, region, neutral_theme)

    assert len(layout.content) == 12
    headers = by_role(layout, "table-header")
    assert [h.text for h in headers] == ["Region", "Revenue", "Code"]
    assert all(h.bold and h.fill_color == "F8FAFC" for h in headers)

    cells = by_role(layout, "table-cell")
    assert [c.text for c in cells] == ["North", "1.2M", "NA", "South", "2.5K", "SA-1", "West", "42", ""]
    assert [c.align for c in cells[:3]] == ["left", "right", "center"]
    assert cells[0].width == pytest.approx(3)
    assert cells[0].height == pytest.approx(0.75)

    # Only the second data row is striped
    assert all(c.fill_color is None for c in cells[:3])
    assert all(c.fill_color == "F8FAFC" for c in cells[3:6])


def test_smart_table_forced_alignment_applies_to_text_only(region, neutral_theme):
    table = TableSpec(headers=["Name", "Revenue"], rows=[["North", 1234567]])
    layout = compose_smart_table(table, region, neutral_theme, TableOptions(text_align="left"))
    cells = by_role(layout, "table-cell")
    assert [(c.text, c.align) for c in cells] == [("North", "left"), ("1.2M", "right")]


def test_smart_table_without_headers(region, neutral_theme):
    layout = compose_smart_table(TableSpec(rows=[[1, "x"]]), region, neutral_theme, TableOptions(alternating_rows=False))
    assert by_role(layout, "table-header") == []
    assert len(by_role(layout, "table-cell")) == 2


def test_empty_table_is_empty_fragment(region, neutral_theme):
    assert compose_smart_table(TableSpec(), region, neutral_theme).content == []


#==============================================================================
# CHARTS
#==============================================================================

def test_chart_color_schemes(neutral_theme):
    themed = get_chart_colors(neutral_theme, "theme")
    assert themed[:3] == ["#2563EB", "#64748B", "#0EA5E9"]
    assert len(themed) == 8

    gradient = get_chart_colors(neutral_theme, "gradient")
    assert len(gradient) == 8
    assert gradient[0] == "#2563EB"
    assert gradient[3] == "#2563EB"

    monochrome = get_chart_colors(neutral_theme, "monochrome")
    assert len(monochrome) == 8
    assert monochrome[3] == "#2563EB"

    assert get_chart_colors(neutral_theme, "vibrant")[0] == "#FF6B6B"


def test_prepare_chart_series(neutral_theme):
    series = [
        ChartSeries(name="Share", labels=["a", "b"], values=[12.3456, 50.0], format="percentage"),
        ChartSeries(name="Count", labels=["a", "b"], values=[1.23456, 2.0]),
        ChartSeries(name="Fixed", values=[1.0], color="#123456"),
    ]
    prepared = prepare_chart_series(series, neutral_theme)
    assert prepared[0].values == [12.35, 50.0]
    assert prepared[1].values == [1.23456, 2.0]
    assert [s.color for s in prepared] == ["#2563EB", "#64748B", "#123456"]


def test_compose_chart_reserves_title_legend_and_subtitle(region, neutral_theme):
    series = [ChartSeries(name="2023", values=[1, 2]), ChartSeries(name="2024", values=[2, 3])]
    options = ChartOptions(title="Revenue", subtitle="Source: finance")
    layout = compose_chart(series, region, neutral_theme, options)

    assert [el.role for el in layout.content] == [
        "chart-title", "chart-plot",
        "chart-legend-swatch", "chart-legend-label",
        "chart-legend-swatch", "chart-legend-label",
        "chart-subtitle",
    ]
    plot = by_role(layout, "chart-plot")[0]
    assert plot.y == pytest.approx(1.9)
    assert plot.height == pytest.approx(2.0)
    swatches = by_role(layout, "chart-legend-swatch")
    assert [s.fill_color for s in swatches] == ["2563EB", "64748B"]
    assert by_role(layout, "chart-subtitle")[0].bottom == pytest.approx(region.bottom)


def test_empty_chart_keeps_plot_area(region, neutral_theme):
    layout = compose_chart([], region, neutral_theme)
    assert [el.role for el in layout.content] == ["chart-plot"]
    assert layout.content[0].height == pytest.approx(3)


#==============================================================================
# CALLOUTS & CARDS
#==============================================================================

def test_callout_colors_follow_semantic_palette(neutral_theme):
    colors = get_callout_colors("warning", neutral_theme)
    assert colors["border"] == "#F59E0B"
    assert colors["background"] == tint("#F59E0B", 0.9)
    assert get_contrast_ratio(colors["text"], colors["background"]) >= 4.5
    assert get_callout_colors("tip", neutral_theme)["accent"] == "#0EA5E9"


def test_compose_callout(region, neutral_theme):
    callout = CalloutSpec(type="error", title="Heads up", content="Budget is over plan.")
    layout = compose_callout(callout, region, neutral_theme)

    assert [el.role for el in layout.content] == [
        "callout-background", "callout-accent", "callout-title", "callout-body",
    ]
    background, accent, title, body = layout.content
    assert background.fill_color == safe_color_format(tint("#EF4444", 0.9))
    assert background.line_color == "EF4444"
    assert accent.width == pytest.approx(0.1)
    assert title.bold
    assert title.x == pytest.approx(0.75)
    assert title.y == pytest.approx(1.65)
    assert body.y == pytest.approx(2.15)
    assert body.right == pytest.approx(region.right - 0.15)
    assert get_contrast_ratio(body.color, background.fill_color) >= 4.5


def test_callout_without_title(region, neutral_theme):
    layout = compose_callout(CalloutSpec(content="Note"), region, neutral_theme)
    assert len(layout.content) == 3
    assert layout.content[-1].y == pytest.approx(1.65)


def test_callout_too_small_for_its_text_raises(neutral_theme):
    callout = CalloutSpec(type="info", title="Heads up", content="Budget is over plan.")
    with pytest.raises(LayoutContractError) as exc_info:
        compose_callout(callout, Box(x=0.5, y=1, width=4, height=0.5), neutral_theme)
    assert exc_info.value.context["role"] == "callout-body"
    assert exc_info.value.context["height"] == pytest.approx(-0.3)


def test_callout_on_dark_theme_keeps_text_readable(region, executive_theme):
    layout = compose_callout(CalloutSpec(type="info", content="Note"), region, executive_theme)
    background, body = layout.content[0], layout.content[-1]
    assert get_contrast_ratio(body.color, background.fill_color) >= 4.5


def test_feature_card_drops_features_that_do_not_fit(neutral_theme):
    card = FeatureCardSpec(
        title="Analytics",
        description="Dashboards for every team",
        features=["Realtime", "Exports", "Alerts", "Sharing", "SSO"],
    )
    layout = compose_feature_card(card, Box(x=0.5, y=1.5, width=3, height=3), neutral_theme)

    assert layout.content[0].role == "card-background"
    assert layout.content[1].role == "card-accent"
    assert layout.content[1].height == pytest.approx(0.1)
    assert [f.text for f in by_role(layout, "card-feature")] == ["Realtime", "Exports", "Alerts"]
    assert len(by_role(layout, "card-bullet")) == 3
    assert all(el.bottom <= 4.5 + 1e-9 for el in layout.content)


def test_metric_card(neutral_theme):
    metric = MetricCardSpec(value=2400000, label="Revenue", description="Up 12% on last year")
    layout = compose_metric_card(metric, Box(x=0.5, y=1.5, width=3, height=2), neutral_theme)

    value = by_role(layout, "metric-value")[0]
    assert value.text == "2.4M"
    assert value.font_size == 36
    assert get_contrast_ratio(value.color, "#F8FAFC") >= 4.5
    assert by_role(layout, "metric-label")[0].text == "Revenue"
    assert len(by_role(layout, "metric-description")) == 1


#==============================================================================
# PROCESS FLOW
#==============================================================================

@pytest.fixture
def steps():
    return [
        ProcessStep(number=1, title="Plan", description="Scope the work"),
        ProcessStep(number=2, title="Build", description="Ship increments"),
        ProcessStep(number=3, title="Measure", description="Track outcomes"),
    ]


def test_horizontal_process_flow(steps, region, neutral_theme):
    layout = compose_process_flow(steps, region, neutral_theme)

    circles = by_role(layout, "process-step")
    numbers = by_role(layout, "process-number")
    arrows = by_role(layout, "process-arrow")
    assert len(circles) == 3
    assert [n.text for n in numbers] == ["1", "2", "3"]
    assert all(n.color == "FFFFFF" for n in numbers)
    assert len(arrows) == 2
    assert all(c.shape == "ellipse" for c in circles)
    # Arrows sit in the gaps between steps
    for arrow, left, right in zip(arrows, circles, circles[1:]):
        assert left.right < arrow.x < right.x
    assert len(by_role(layout, "process-description")) == 3


def test_process_flow_in_short_region_raises(steps, neutral_theme):
    short = Box(x=0.5, y=1, width=9, height=0.5)
    with pytest.raises(LayoutContractError) as exc_info:
        compose_process_flow(steps, short, neutral_theme)
    assert exc_info.value.context["role"] == "process-description"

    with pytest.raises(LayoutContractError) as exc_info:
        compose_process_flow(steps, short, neutral_theme, orientation="vertical")
    assert exc_info.value.context["role"] == "process-step"


def test_vertical_process_flow(steps, region, neutral_theme):
    layout = compose_process_flow(steps, region, neutral_theme, orientation="vertical")
    circles = by_role(layout, "process-step")
    assert all(c.x == pytest.approx(region.x) for c in circles)
    assert [c.y for c in circles] == sorted(c.y for c in circles)
    assert len(by_role(layout, "process-arrow")) == 2


def test_empty_process_flow(region, neutral_theme):
    assert compose_process_flow([], region, neutral_theme).content == []


def test_region_must_be_a_box(neutral_theme):
    with pytest.raises(LayoutContractError):
        compose_callout(CalloutSpec(content="x"), {"x": 0, "y": 0, "width": 1, "height": 1}, neutral_theme)
