"""Render a validated analysis into the grounding text sent with every chat turn."""

from __future__ import annotations

from virtual_architect.schemas import AnalysisResult, DimensionAssessment

FEEDBACK_SEPARATOR = ". "

# (score label, feedback label, attribute) in rendering order.
_SECTIONS: tuple[tuple[str, str, str], ...] = (
    ("Layout Efficiency", "Layout", "layout"),
    ("Natural Lighting", "Lighting", "lighting"),
    ("Traffic Flow", "Traffic Flow", "flow"),
)


def build_analysis_context(result: AnalysisResult) -> str:
    """Return the fixed-format context block for ``result``.

    Every feedback item is included on every call; nothing is summarized.
    """
    blocks = []
    for score_label, feedback_label, attribute in _SECTIONS:
        dimension: DimensionAssessment = getattr(result, attribute)
        blocks.append(
            f"{score_label} Score: {dimension.score}/100\n"
            f"{feedback_label} Feedback: {_join_feedback(dimension)}"
        )
    return "\n\n".join(blocks)


def _join_feedback(dimension: DimensionAssessment) -> str:
    return FEEDBACK_SEPARATOR.join(str(item) for item in dimension.feedback)


__all__ = ["FEEDBACK_SEPARATOR", "build_analysis_context"]
