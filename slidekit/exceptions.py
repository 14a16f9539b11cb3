"""
Exception hierarchy for the layout engine.

Design-rule violations are never raised; they are reported as StyleIssue
values. Exceptions here signal programmer-visible contract violations that
must fail loudly during development and testing.
"""

from typing import Optional, Dict, Any


class LayoutEngineError(Exception):
    """Base exception for all layout engine errors"""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self):
        parts = [super().__str__()]
        if self.cause:
            parts.append(f" (caused by: {type(self.cause).__name__}: {str(self.cause)})")
        if self.context:
            parts.append(f" Context: {self.context}")
        return "".join(parts)


class LayoutContractError(LayoutEngineError):
    """Geometry handed to the engine breaks its contract (negative or non-finite)"""
    pass


class InvalidGridColumnError(LayoutContractError):
    """Grid column start/span falls outside the grid"""

    def __init__(self, start: int, span: int, columns: int, **kwargs):
        super().__init__(
            f"Grid column start={start} span={span} does not fit a {columns}-column grid",
            **kwargs
        )
        self.start = start
        self.span = span
        self.columns = columns
        self.context.update({'start': start, 'span': span, 'columns': columns})


class CompositionError(LayoutEngineError):
    """A slide request could not be mapped to a composer"""
    pass
