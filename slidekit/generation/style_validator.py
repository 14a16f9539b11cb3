"""
Style validator for composed slides.

Each rule is a pure function over (LayoutSpec, ThemeTokens) returning a
RuleResult. validate_layout_spec runs every rule and deducts the rule's
weight once per failing rule; validate_slide_build_result additionally folds
in build metadata with per-issue severity penalties. Both read the same
SCORING table.
"""

import functools
from typing import Callable, Dict, List, Optional, Tuple

from slidekit.config.engine_config import (
    DENSITY_THRESHOLD,
    GEOMETRY_EPSILON,
    MIN_FONT_SIZE,
    SCORING,
    WCAG_AA_RATIO,
)
from slidekit.generation.color_science import get_contrast_ratio, safe_color_format
from slidekit.models.content import SlideBuildResult
from slidekit.models.geometry import LayoutSpec, TextBlock
from slidekit.models.theme import ThemeTokens
from slidekit.models.validation import (
    Grade,
    IssueCategory,
    IssueSeverity,
    IssueType,
    RuleResult,
    StyleIssue,
    Subscores,
    ValidationResult,
)
from slidekit.setup_logging_optimized import get_logger

logger = get_logger(__name__)

Rule = Callable[[LayoutSpec, ThemeTokens], RuleResult]


#==============================================================================
# RULES
#==============================================================================

def validate_safe_margins(layout: LayoutSpec, theme: ThemeTokens) -> RuleResult:
    """Report each element that crosses the safe margin, naming the sides it crosses."""
    margin = theme.layout.safe_margin
    min_edge = margin - GEOMETRY_EPSILON
    max_right = theme.layout.slide_width - margin + GEOMETRY_EPSILON
    max_bottom = theme.layout.slide_height - margin + GEOMETRY_EPSILON
    issues = []

    for index, element in enumerate(layout.content):
        sides = []
        if element.x < min_edge:
            sides.append('left')
        if element.y < min_edge:
            sides.append('top')
        if element.right > max_right:
            sides.append('right')
        if element.bottom > max_bottom:
            sides.append('bottom')
        if not sides:
            continue

        issues.append(StyleIssue(
            type=IssueType.WARNING,
            category=IssueCategory.LAYOUT,
            severity=IssueSeverity.MAJOR,
            message=f"Element {index + 1} violates {', '.join(sides)} safe margin",
            fix=f"Keep the element at least {margin}in from the slide edges",
            rule='safe_margins',
            elements=[index],
        ))

    return RuleResult(valid=not issues, issues=issues)


def check_overlapping_elements(layout: LayoutSpec, theme: Optional[ThemeTokens] = None) -> RuleResult:
    """Pairwise intersection test; one issue per overlapping pair."""
    elements = layout.content
    issues = []

    for i in range(len(elements)):
        for j in range(i + 1, len(elements)):
            if elements[i].overlaps(elements[j]):
                issues.append(StyleIssue(
                    type=IssueType.WARNING,
                    category=IssueCategory.LAYOUT,
                    severity=IssueSeverity.MAJOR,
                    message=f"Elements {i + 1} and {j + 1} overlap",
                    fix="Move or resize one of the elements",
                    rule='overlap',
                    elements=[i, j],
                ))

    return RuleResult(valid=not issues, issues=issues)


def _indexed_text(layout: LayoutSpec) -> List[Tuple[int, TextBlock]]:
    return [(index, el) for index, el in enumerate(layout.content) if el.kind == 'text']


def _hierarchy_issue(message: str, elements: List[int]) -> StyleIssue:
    return StyleIssue(
        type=IssueType.WARNING,
        category=IssueCategory.TYPOGRAPHY,
        severity=IssueSeverity.MINOR,
        message=message,
        fix="Use the theme's heading and body sizes to separate levels",
        rule='hierarchy',
        elements=elements,
    )


def validate_typography_hierarchy(layout: LayoutSpec, theme: ThemeTokens) -> RuleResult:
    text_elements = _indexed_text(layout)
    if not text_elements:
        return RuleResult(valid=True)

    issues = []
    indices = [index for index, _ in text_elements]
    unique_sizes = {el.font_size for _, el in text_elements}

    if len(unique_sizes) == 1 and len(text_elements) > 1:
        issues.append(_hierarchy_issue(
            "All text elements use the same font size (no hierarchy) - consider establishing hierarchy",
            indices,
        ))

    title_size = theme.typography.font_sizes.h1
    titles = [index for index, el in text_elements if el.font_size >= title_size]
    if not titles:
        issues.append(_hierarchy_issue(
            "No title-sized text found - consider adding a clear heading",
            [],
        ))
    elif len(titles) > 2:
        issues.append(_hierarchy_issue(
            "Too many title-sized elements may confuse hierarchy",
            titles,
        ))

    return RuleResult(valid=not issues, issues=issues)


def validate_spacing_consistency(layout: LayoutSpec, theme: ThemeTokens) -> RuleResult:
    """
    Compare the vertical gaps between consecutive elements in (y, x) order.

    Reports a single aggregate issue when the gaps are uneven, unlike the
    overlap rule which reports each pair.
    """
    if len(layout.content) < 2:
        return RuleResult(valid=True)

    ordered = sorted(enumerate(layout.content), key=lambda item: (item[1].y, item[1].x))
    gaps = []
    involved = set()
    for (cur_index, current), (next_index, following) in zip(ordered, ordered[1:]):
        if following.y > current.bottom:
            gaps.append(following.y - current.bottom)
            involved.update((cur_index, next_index))

    if len(gaps) <= 1:
        return RuleResult(valid=True)

    mean_gap = sum(gaps) / len(gaps)
    tolerance = theme.spacing.xs
    if all(abs(gap - mean_gap) <= tolerance for gap in gaps):
        return RuleResult(valid=True)

    logger.debug(f"Uneven vertical gaps {[round(g, 3) for g in gaps]} (mean {mean_gap:.3f})")
    issue = StyleIssue(
        type=IssueType.WARNING,
        category=IssueCategory.LAYOUT,
        severity=IssueSeverity.MINOR,
        message="Inconsistent vertical spacing between elements",
        fix=f"Use one spacing token between stacked elements (mean gap {mean_gap:.2f}in)",
        rule='spacing',
        elements=sorted(involved),
    )
    return RuleResult(valid=False, issues=[issue])


def text_background(element: TextBlock, theme: ThemeTokens) -> str:
    """The color a text block is read against: its own fill, else the slide background."""
    return element.fill_color or theme.palette.background


def _reading_order_key(theme: ThemeTokens):
    row_tolerance = theme.spacing.sm

    def compare(a: Tuple[int, TextBlock], b: Tuple[int, TextBlock]) -> int:
        (_, first), (_, second) = a, b
        if abs(first.y - second.y) < row_tolerance:
            delta = first.x - second.x
        else:
            delta = first.y - second.y
        return (delta > 0) - (delta < 0)

    return functools.cmp_to_key(compare)


def validate_layout_accessibility(layout: LayoutSpec, theme: ThemeTokens) -> RuleResult:
    """
    Minimum font size, WCAG AA contrast and a reading-order heuristic.

    The reading-order heuristic adds a minor warning but never fails the rule.
    """
    text_elements = _indexed_text(layout)
    issues = []

    for index, element in text_elements:
        if element.font_size < MIN_FONT_SIZE:
            issues.append(StyleIssue(
                type=IssueType.WARNING,
                category=IssueCategory.ACCESSIBILITY,
                severity=IssueSeverity.MAJOR,
                message=(
                    f"Text element {index + 1} font size ({element.font_size:g}pt) "
                    f"is below minimum ({MIN_FONT_SIZE}pt)"
                ),
                fix=f"Use at least {MIN_FONT_SIZE}pt",
                rule='accessibility',
                elements=[index],
            ))

    for index, element in text_elements:
        background = text_background(element, theme)
        if not element.color or not background:
            continue
        contrast = get_contrast_ratio(element.color, background)
        if contrast < WCAG_AA_RATIO:
            issues.append(StyleIssue(
                type=IssueType.ERROR,
                category=IssueCategory.ACCESSIBILITY,
                severity=IssueSeverity.MAJOR,
                message=f"Text element {index + 1} has insufficient color contrast ({contrast:.1f}:1)",
                fix=f"Raise contrast against #{safe_color_format(background)} to at least {WCAG_AA_RATIO}:1",
                rule='accessibility',
                elements=[index],
            ))

    # Reading order is advisory; validity is settled by size and contrast
    valid = not issues

    if len(text_elements) > 1:
        reading_order = sorted(text_elements, key=_reading_order_key(theme))
        if [i for i, _ in reading_order] != [i for i, _ in text_elements]:
            issues.append(StyleIssue(
                type=IssueType.WARNING,
                category=IssueCategory.ACCESSIBILITY,
                severity=IssueSeverity.MINOR,
                message="Text elements may not follow logical reading order",
                fix="Order text top-to-bottom, left-to-right",
                rule='accessibility',
                elements=[i for i, _ in reading_order],
            ))

    return RuleResult(valid=valid, issues=issues)


LAYOUT_RULES: List[Tuple[str, Rule]] = [
    ('safe_margins', validate_safe_margins),
    ('overlap', check_overlapping_elements),
    ('hierarchy', validate_typography_hierarchy),
    ('spacing', validate_spacing_consistency),
    ('accessibility', validate_layout_accessibility),
]


#==============================================================================
# SCORING
#==============================================================================

def calculate_grade(score: int) -> Grade:
    for threshold, grade in SCORING["grade_thresholds"]:
        if score >= threshold:
            return grade
    return SCORING["failing_grade"]


def _clamp_score(score: float) -> int:
    return int(max(SCORING["min_score"], min(SCORING["max_score"], round(score))))


def _severity_penalty(issues: List[StyleIssue]) -> int:
    penalties = SCORING["severity_penalties"]
    return sum(penalties[issue.severity.value] for issue in issues)


def generate_layout_suggestions(issues: List[StyleIssue], layout: LayoutSpec) -> List[str]:
    """One canned remediation per matched issue family, plus a density hint."""
    suggestions = []
    messages = [issue.message.lower() for issue in issues]

    if any('overlap' in message for message in messages):
        suggestions.append('Increase spacing between elements to prevent overlapping')
    if any('margin' in message for message in messages):
        suggestions.append('Ensure all elements maintain safe margins from slide edges')
    if any('hierarchy' in message for message in messages):
        suggestions.append('Establish clear typography hierarchy with varied font sizes')
    if any('contrast' in message for message in messages):
        suggestions.append('Improve color contrast for better readability')
    if len(layout.content) > DENSITY_THRESHOLD:
        suggestions.append('Consider reducing content density for better visual impact')

    return suggestions


def compute_subscores(
    layout: LayoutSpec,
    theme: ThemeTokens,
    rule_results: Dict[str, RuleResult]
) -> Subscores:
    """Informational category scores. They never add issues or change the overall score."""
    text_elements = layout.text_blocks()

    # Accessibility: share of text blocks that pass both size and contrast
    if text_elements:
        passing = sum(
            1 for el in text_elements
            if el.font_size >= MIN_FONT_SIZE
            and get_contrast_ratio(el.color, text_background(el, theme)) >= WCAG_AA_RATIO
        )
        accessibility = round(100 * passing / len(text_elements))
    else:
        accessibility = 100

    # Typography: hierarchy findings and undersized text
    findings = len(rule_results['hierarchy'].issues) if 'hierarchy' in rule_results else 0
    if 'accessibility' in rule_results:
        findings += sum(1 for issue in rule_results['accessibility'].issues if 'font size' in issue.message)
    typography = 100 - 25 * findings

    # Color harmony: palette breadth, base text contrast, color sprawl
    palette = theme.palette
    color_harmony = 100
    brand_colors = {safe_color_format(c) for c in (palette.primary, palette.secondary, palette.accent)}
    if len(brand_colors) < 3:
        color_harmony -= 10
    if get_contrast_ratio(palette.text.primary, palette.background) < WCAG_AA_RATIO:
        color_harmony -= 25
    content_colors = set()
    for element in layout.content:
        if element.fill_color:
            content_colors.add(safe_color_format(element.fill_color))
        if element.kind == 'text':
            content_colors.add(safe_color_format(element.color))
    if len(content_colors) > DENSITY_THRESHOLD:
        color_harmony -= 15

    return Subscores(
        accessibility=_clamp_score(accessibility),
        typography=_clamp_score(typography),
        color_harmony=_clamp_score(color_harmony),
    )


def _run_rules(layout: LayoutSpec, theme: ThemeTokens) -> Dict[str, RuleResult]:
    return {name: rule(layout, theme) for name, rule in LAYOUT_RULES}


def _score_rules(rule_results: Dict[str, RuleResult]) -> Tuple[int, List[StyleIssue]]:
    """Deduct each failing rule's weight once and collect every rule's issues."""
    weights = SCORING["rule_weights"]
    score = SCORING["max_score"]
    issues: List[StyleIssue] = []
    for name, result in rule_results.items():
        issues.extend(result.issues)
        if not result.valid:
            score -= weights[name]
    return score, issues


def _result(
    score: float,
    issues: List[StyleIssue],
    layout: LayoutSpec,
    theme: ThemeTokens,
    rule_results: Dict[str, RuleResult]
) -> ValidationResult:
    final_score = _clamp_score(score)
    critical = sum(1 for issue in issues if issue.severity == IssueSeverity.CRITICAL)
    return ValidationResult(
        score=final_score,
        grade=calculate_grade(final_score),
        is_valid=final_score >= SCORING["pass_score"] and critical == 0,
        issues=issues,
        suggestions=generate_layout_suggestions(issues, layout),
        subscores=compute_subscores(layout, theme, rule_results),
        checks={name: result.valid for name, result in rule_results.items()},
    )


def validate_layout_spec(layout: LayoutSpec, theme: ThemeTokens) -> ValidationResult:
    """Run every layout rule; deduct each failing rule's weight once."""
    rule_results = _run_rules(layout, theme)
    score, issues = _score_rules(rule_results)

    validation = _result(score, issues, layout, theme, rule_results)
    logger.info(
        f"Layout validation: score={validation.score} grade={validation.grade} "
        f"issues={len(issues)} failed={[n for n, ok in validation.checks.items() if not ok]}"
    )
    return validation


def validate_slide_build_result(result: SlideBuildResult, theme: ThemeTokens) -> ValidationResult:
    """
    Layout validation plus the build metadata.

    Metadata warnings become content/minor issues and metadata errors
    layout/critical issues; an empty slide is flagged as sparse content.
    Severity penalties apply to these build-level issues only, so a layout
    rule is never charged twice.
    """
    layout = result.layout
    rule_results = _run_rules(layout, theme)
    score, layout_issues = _score_rules(rule_results)

    build_issues: List[StyleIssue] = []
    for warning in result.metadata.warnings:
        build_issues.append(StyleIssue(
            type=IssueType.WARNING,
            category=IssueCategory.CONTENT,
            severity=IssueSeverity.MINOR,
            message=warning,
            rule='build',
        ))
    for error in result.metadata.errors:
        build_issues.append(StyleIssue(
            type=IssueType.ERROR,
            category=IssueCategory.LAYOUT,
            severity=IssueSeverity.CRITICAL,
            message=error,
            rule='build',
        ))
    if not layout.content:
        build_issues.append(StyleIssue(
            type=IssueType.INFO,
            category=IssueCategory.CONTENT,
            severity=IssueSeverity.MINOR,
            message="Slide has no content elements",
            fix="Add a heading and at least one content element",
            rule='build',
        ))

    score -= _severity_penalty(build_issues)
    validation = _result(score, layout_issues + build_issues, layout, theme, rule_results)
    logger.info(
        f"Build validation: score={validation.score} grade={validation.grade} "
        f"build_issues={len(build_issues)} valid={validation.is_valid}"
    )
    return validation


#==============================================================================
# REPORTING
#==============================================================================

_SEVERITY_ICONS = {
    IssueSeverity.CRITICAL: '🔴',
    IssueSeverity.MAJOR: '🟡',
    IssueSeverity.MINOR: '🔵',
}


def generate_style_quality_report(result: ValidationResult, theme_name: Optional[str] = None) -> str:
    """Markdown summary of a validation result."""
    lines = [
        "# Style Quality Report",
        "",
        f"**Overall Score:** {result.score}/100 (grade {result.grade})",
        f"**Theme:** {theme_name or 'unnamed'}",
        f"**Status:** {'✅ Valid' if result.is_valid else '❌ Issues Found'}",
        "",
        "## Subscores",
        "",
        f"- Accessibility: {result.subscores.accessibility}",
        f"- Typography: {result.subscores.typography}",
        f"- Color harmony: {result.subscores.color_harmony}",
        "",
    ]

    if result.issues:
        lines.append(f"## Issues Found ({len(result.issues)})")
        lines.append("")
        for issue in result.issues:
            icon = _SEVERITY_ICONS[issue.severity]
            lines.append(f"{icon} **{issue.category.value.upper()}**: {issue.message}")
            if issue.fix:
                lines.append(f"   *Fix:* {issue.fix}")
        lines.append("")

    if result.suggestions:
        lines.append(f"## Recommendations ({len(result.suggestions)})")
        lines.append("")
        lines.extend(f"- {suggestion}" for suggestion in result.suggestions)
        lines.append("")

    return "\n".join(lines)
