"""
Tests for the layout rules, score aggregation, suggestions and reporting.
"""

import pytest

from slidekit.generation.style_validator import (
    calculate_grade,
    check_overlapping_elements,
    generate_layout_suggestions,
    generate_style_quality_report,
    validate_layout_accessibility,
    validate_layout_spec,
    validate_safe_margins,
    validate_slide_build_result,
    validate_spacing_consistency,
    validate_typography_hierarchy,
)
from slidekit.models import (
    Box,
    IssueCategory,
    IssueSeverity,
    IssueType,
    LayoutSpec,
    SlideBuildResult,
    StyleIssue,
    TextBlock,
)


def text(x, y, width=4, height=0.5, size=18, color="0F172A", **style):
    return TextBlock(x=x, y=y, width=width, height=height, text="Sample", font_size=size, color=color, **style)


def layout_of(theme, *elements):
    return LayoutSpec.for_theme(theme, list(elements))


#==============================================================================
# SCENARIOS
#==============================================================================

def test_same_size_text_has_no_hierarchy(neutral_theme):
    layout = layout_of(
        neutral_theme,
        Box(x=1, y=1, width=2, height=0.5),
        text(1, 2),
        text(1, 3),
    )
    result = validate_layout_spec(layout, neutral_theme)

    assert result.checks == {
        "safe_margins": True,
        "overlap": True,
        "hierarchy": False,
        "spacing": True,
        "accessibility": True,
    }
    assert result.score == 90
    assert any("no hierarchy" in issue.message for issue in result.issues_for("hierarchy"))


def test_margin_violation_references_element(theme_factory):
    theme = theme_factory(safeMargin=0.3)
    layout = layout_of(theme, Box(x=-0.1, y=0, width=2, height=1))
    result = validate_layout_spec(layout, theme)

    assert result.score == 85
    assert result.checks["safe_margins"] is False
    issues = result.issues_for("safe_margins")
    assert len(issues) == 1
    assert issues[0].elements == [0]
    assert "Element 1" in issues[0].message
    assert "left" in issues[0].message and "top" in issues[0].message


def test_empty_layout_is_perfect(neutral_theme):
    result = validate_layout_spec(layout_of(neutral_theme), neutral_theme)
    assert result.score == 100
    assert result.issues == []
    assert result.is_valid
    assert result.grade == "A"


def test_identical_boxes_overlap(theme_factory):
    theme = theme_factory(safeMargin=0)
    layout = layout_of(theme, Box(x=0, y=0, width=1, height=1), Box(x=0, y=0, width=1, height=1))
    result = validate_layout_spec(layout, theme)

    assert result.score == 80
    assert result.grade == "B"
    assert result.is_valid
    overlaps = result.issues_for("overlap")
    assert len(overlaps) == 1
    assert overlaps[0].elements == [0, 1]
    assert "Increase spacing between elements to prevent overlapping" in result.suggestions


def test_every_rule_failing_deducts_each_weight_once(neutral_theme):
    layout = layout_of(
        neutral_theme,
        text(0, 0, width=2, size=10),
        text(1, 0.2, width=2, size=10),
        Box(x=1, y=2, width=1, height=0.5),
        Box(x=1, y=4, width=1, height=0.2),
    )
    result = validate_layout_spec(layout, neutral_theme)

    assert not any(result.checks.values())
    assert result.score == 30
    assert result.grade == "F"
    assert not result.is_valid


#==============================================================================
# RULES
#==============================================================================

def test_margins_pass_inside_content_area(neutral_theme):
    layout = layout_of(neutral_theme, Box(x=0.5, y=0.5, width=9, height=4.625))
    assert validate_safe_margins(layout, neutral_theme).valid


def test_right_and_bottom_margins(neutral_theme):
    layout = layout_of(neutral_theme, Box(x=8, y=4, width=2, height=1.5))
    issue = validate_safe_margins(layout, neutral_theme).issues[0]
    assert "right" in issue.message and "bottom" in issue.message


def test_overlaps_reported_per_pair(neutral_theme):
    layout = layout_of(
        neutral_theme,
        Box(x=1, y=1, width=3, height=3),
        Box(x=2, y=2, width=1, height=1),
        Box(x=2.5, y=2.5, width=1, height=1),
    )
    result = check_overlapping_elements(layout)
    assert [issue.elements for issue in result.issues] == [[0, 1], [0, 2], [1, 2]]
    assert all("overlap" in issue.message for issue in result.issues)


def test_touching_boxes_do_not_overlap(neutral_theme):
    layout = layout_of(neutral_theme, Box(x=1, y=1, width=1, height=1), Box(x=2, y=1, width=1, height=1))
    assert check_overlapping_elements(layout, neutral_theme).valid


def test_missing_and_competing_titles(neutral_theme):
    no_title = layout_of(neutral_theme, text(1, 1, size=18), text(1, 2, size=14))
    messages = [i.message for i in validate_typography_hierarchy(no_title, neutral_theme).issues]
    assert messages == ["No title-sized text found - consider adding a clear heading"]

    competing = layout_of(
        neutral_theme,
        text(1, 1, size=36), text(1, 2, size=40), text(1, 3, size=44), text(1, 4, size=18),
    )
    issues = validate_typography_hierarchy(competing, neutral_theme).issues
    assert len(issues) == 1
    assert issues[0].elements == [0, 1, 2]


def test_clear_hierarchy_passes(neutral_theme):
    layout = layout_of(neutral_theme, text(1, 1, size=36), text(1, 2, size=18))
    assert validate_typography_hierarchy(layout, neutral_theme).valid


def test_uneven_spacing_is_one_aggregate_issue(neutral_theme):
    layout = layout_of(
        neutral_theme,
        Box(x=1, y=1, width=1, height=0.5),
        Box(x=1, y=2, width=1, height=0.5),
        Box(x=1, y=3.5, width=1, height=0.5),
        Box(x=1, y=4.5, width=1, height=0.1),
    )
    result = validate_spacing_consistency(layout, neutral_theme)
    assert not result.valid
    assert len(result.issues) == 1
    assert result.issues[0].elements == [0, 1, 2, 3]


def test_even_spacing_within_tolerance(neutral_theme):
    layout = layout_of(
        neutral_theme,
        Box(x=1, y=1, width=1, height=0.5),
        Box(x=1, y=2, width=1, height=0.5),
        Box(x=1, y=3.02, width=1, height=0.5),
    )
    assert validate_spacing_consistency(layout, neutral_theme).valid


def test_small_font_and_low_contrast(neutral_theme):
    layout = layout_of(neutral_theme, text(1, 1, size=10), text(1, 2, size=36, color="CBD5E1"))
    result = validate_layout_accessibility(layout, neutral_theme)

    assert not result.valid
    small, contrast = result.issues
    assert small.elements == [0]
    assert "10pt" in small.message
    assert contrast.type == IssueType.ERROR
    assert "contrast" in contrast.message
    assert contrast.elements == [1]


def test_contrast_uses_text_fill_when_present(neutral_theme):
    layout = layout_of(neutral_theme, text(1, 1, size=36, color="FFFFFF", fill_color="2563EB"))
    assert validate_layout_accessibility(layout, neutral_theme).valid


def test_dark_theme_contrast(executive_theme):
    layout = layout_of(executive_theme, text(1, 1, size=36, color="0F172A"))
    result = validate_layout_accessibility(layout, executive_theme)
    assert not result.valid
    assert "contrast" in result.issues[0].message


def test_reading_order_warns_without_failing(neutral_theme):
    layout = layout_of(neutral_theme, text(1, 3, size=18), text(1, 1, size=36))
    result = validate_layout_spec(layout, neutral_theme)

    assert result.checks["accessibility"] is True
    assert result.score == 100
    order = [i for i in result.issues if "reading order" in i.message]
    assert len(order) == 1
    assert order[0].type == IssueType.WARNING
    assert order[0].severity == IssueSeverity.MINOR
    assert order[0].elements == [1, 0]


def test_same_row_reads_left_to_right(neutral_theme):
    layout = layout_of(neutral_theme, text(1, 1, width=2, size=36), text(4, 1.05, width=2, size=18))
    assert validate_layout_accessibility(layout, neutral_theme).issues == []


#==============================================================================
# AGGREGATION
#==============================================================================

@pytest.mark.parametrize("score,grade", [(100, "A"), (90, "A"), (89, "B"), (80, "B"), (70, "C"), (60, "D"), (59, "F"), (0, "F")])
def test_calculate_grade(score, grade):
    assert calculate_grade(score) == grade


def clean_layout(theme):
    return layout_of(theme, text(1, 1, size=36))


def test_build_warnings_cost_minor_penalty(neutral_theme):
    result = SlideBuildResult.from_layout(clean_layout(neutral_theme), warnings=["Title may be too long"])
    validation = validate_slide_build_result(result, neutral_theme)

    assert validation.score == 95
    assert validation.grade == "A"
    assert validation.is_valid
    build = validation.issues_for("build")
    assert build[0].category == IssueCategory.CONTENT
    assert build[0].severity == IssueSeverity.MINOR


def test_build_errors_are_critical(neutral_theme):
    result = SlideBuildResult.from_layout(clean_layout(neutral_theme), errors=["Renderer rejected shape"])
    validation = validate_slide_build_result(result, neutral_theme)

    assert validation.score == 75
    assert validation.grade == "C"
    assert validation.critical_count == 1
    assert not validation.is_valid


def test_layout_rules_are_not_charged_twice(theme_factory):
    theme = theme_factory(safeMargin=0)
    layout = layout_of(theme, Box(x=0, y=0, width=1, height=1), Box(x=0, y=0, width=1, height=1))
    validation = validate_slide_build_result(SlideBuildResult.from_layout(layout), theme)
    assert validation.score == 80


def test_empty_build_is_flagged_as_sparse(neutral_theme):
    validation = validate_slide_build_result(SlideBuildResult.from_layout(layout_of(neutral_theme)), neutral_theme)
    assert validation.score == 95
    assert validation.issues[0].category == IssueCategory.CONTENT
    assert validation.issues[0].type == IssueType.INFO


def test_score_is_clamped_at_zero(neutral_theme):
    result = SlideBuildResult.from_layout(
        clean_layout(neutral_theme),
        errors=[f"error {n}" for n in range(6)],
    )
    validation = validate_slide_build_result(result, neutral_theme)
    assert validation.score == 0
    assert validation.grade == "F"


def test_subscores(neutral_theme):
    layout = layout_of(neutral_theme, text(1, 1, size=36), text(1, 2, size=10))
    subscores = validate_layout_spec(layout, neutral_theme).subscores
    assert subscores.accessibility == 50
    assert subscores.typography == 75
    assert subscores.color_harmony == 100


#==============================================================================
# SUGGESTIONS & REPORT
#==============================================================================

def issue(message):
    return StyleIssue(type="warning", category="layout", message=message, severity="minor")


def test_suggestions_map_issue_families(neutral_theme):
    issues = [issue("Elements 1 and 2 overlap"), issue("Text element 3 has insufficient color contrast (2.0:1)")]
    suggestions = generate_layout_suggestions(issues, layout_of(neutral_theme))
    assert suggestions == [
        "Increase spacing between elements to prevent overlapping",
        "Improve color contrast for better readability",
    ]


def test_density_suggestion(neutral_theme):
    boxes = [Box(x=0.5 + i, y=1, width=0.5, height=0.5) for i in range(9)]
    suggestions = generate_layout_suggestions([], layout_of(neutral_theme, *boxes))
    assert suggestions == ["Consider reducing content density for better visual impact"]


def test_quality_report(theme_factory):
    theme = theme_factory(safeMargin=0)
    layout = layout_of(theme, Box(x=0, y=0, width=1, height=1), Box(x=0, y=0, width=1, height=1))
    report = generate_style_quality_report(validate_layout_spec(layout, theme), theme.name)

    assert report.startswith("# Style Quality Report")
    assert "**Overall Score:** 80/100 (grade B)" in report
    assert "**Theme:** neutral" in report
    assert "## Issues Found (1)" in report
    assert "**LAYOUT**: Elements 1 and 2 overlap" in report
    assert "## Recommendations (1)" in report
