from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class ProblemDetail(BaseModel):
    """RFC 7807 shaped error record."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    code: str
    errors: List[Dict[str, Any]] = []


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        super().__init__(detail or title)
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code

    def to_problem(self) -> ProblemDetail:
        return ProblemDetail(
            type=self.type,
            title=self.title,
            detail=self.detail,
            code=self.code,
        )


class ValidationError(DomainException):
    """Raised when a snapshot, event or set score fails boundary validation."""

    def __init__(
        self, detail: str, *, errors: Optional[List[Dict[str, Any]]] = None
    ) -> None:
        super().__init__(
            title="Invalid input",
            detail=detail,
            code="validation_error",
        )
        self.errors = list(errors or [])

    def to_problem(self) -> ProblemDetail:
        problem = super().to_problem()
        return problem.model_copy(update={"errors": self.errors})


class InvariantViolation(DomainException):
    """An internal state was observed that cannot be built by the engine."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            title="Broken scoring invariant",
            detail=detail,
            code="invariant_violation",
        )
