"""Structural gate for analysis payloads crossing a process or network boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from virtual_architect.schemas import AnalysisResult


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Outcome of checking an untrusted payload against the analysis shape."""

    result: AnalysisResult | None
    errors: tuple[str, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.result is not None


def validate_analysis(raw: Any) -> ValidationOutcome:
    """Accept ``raw`` only when layout, lighting and flow are all well formed.

    Only the shape is checked: scores are not range-checked, feedback may be
    empty and unknown keys are ignored. A rejected payload never yields a
    partial result.
    """
    try:
        result = AnalysisResult.model_validate(raw)
    except ValidationError as exc:
        return ValidationOutcome(result=None, errors=_describe(exc))
    return ValidationOutcome(result=result)


def _describe(exc: ValidationError) -> tuple[str, ...]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "payload"
        messages.append(f"{location}: {error['msg']}")
    return tuple(messages)


__all__ = ["ValidationOutcome", "validate_analysis"]
