"""
Validation output types: classified issues and the aggregated result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import Field

from slidekit.models.base import EngineModel


class IssueType(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueCategory(str, Enum):
    TYPOGRAPHY = "typography"
    COLOR = "color"
    LAYOUT = "layout"
    ACCESSIBILITY = "accessibility"
    CONTENT = "content"


class IssueSeverity(str, Enum):
    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"


Grade = Literal['A', 'B', 'C', 'D', 'F']


class StyleIssue(EngineModel):
    type: IssueType
    category: IssueCategory
    message: str
    severity: IssueSeverity
    fix: Optional[str] = None
    rule: Optional[str] = Field(default=None, description="Name of the rule that raised the issue")
    elements: List[int] = Field(default_factory=list, description="0-based content indices involved")


class Subscores(EngineModel):
    accessibility: int = 100
    typography: int = 100
    color_harmony: int = 100


class ValidationResult(EngineModel):
    score: int = Field(ge=0, le=100)
    grade: Grade
    is_valid: bool
    issues: List[StyleIssue] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    subscores: Subscores = Field(default_factory=Subscores)
    checks: Dict[str, bool] = Field(default_factory=dict)

    def issues_for(self, rule: str) -> List[StyleIssue]:
        return [issue for issue in self.issues if issue.rule == rule]

    @property
    def critical_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == IssueSeverity.CRITICAL)


@dataclass
class RuleResult:
    """Outcome of a single validation rule."""
    valid: bool
    issues: List[StyleIssue] = field(default_factory=list)
