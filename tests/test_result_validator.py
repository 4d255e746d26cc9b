try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from virtual_architect.services.result_validator import validate_analysis


def test_accepts_well_formed_analysis(analysis_payload: dict) -> None:
    outcome = validate_analysis(analysis_payload)

    assert outcome.accepted
    assert outcome.errors == ()
    result = outcome.result
    assert result.layout.score == 72
    assert list(result.layout.feedback) == ["Open kitchen merges into living space"]
    assert result.lighting.score == 55
    assert result.flow.score == 80
    assert result.to_payload() == analysis_payload


@pytest.mark.parametrize("missing", ["layout", "lighting", "flow"])
def test_rejects_missing_dimension(analysis_payload: dict, missing: str) -> None:
    del analysis_payload[missing]

    outcome = validate_analysis(analysis_payload)

    assert not outcome.accepted
    assert outcome.result is None
    assert any(error.startswith(missing) for error in outcome.errors)


def test_missing_flow_rejected_even_with_empty_layout_feedback(analysis_payload: dict) -> None:
    analysis_payload["layout"]["feedback"] = []
    del analysis_payload["flow"]

    assert not validate_analysis(analysis_payload).accepted


@pytest.mark.parametrize("score", ["72", None, True, [72], {"value": 72}])
def test_rejects_non_numeric_score(analysis_payload: dict, score: object) -> None:
    analysis_payload["lighting"]["score"] = score

    outcome = validate_analysis(analysis_payload)

    assert not outcome.accepted
    assert any("lighting.score" in error for error in outcome.errors)


@pytest.mark.parametrize(
    "feedback",
    ["Open kitchen", {"first": "Open kitchen"}, {"Open kitchen"}, None, 3],
)
def test_rejects_feedback_that_is_not_an_ordered_sequence(
    analysis_payload: dict, feedback: object
) -> None:
    analysis_payload["flow"]["feedback"] = feedback

    outcome = validate_analysis(analysis_payload)

    assert not outcome.accepted
    assert any("flow.feedback" in error for error in outcome.errors)


@pytest.mark.parametrize("raw", [None, "analysis", 42, ["layout", "lighting", "flow"]])
def test_rejects_non_mapping_payloads(raw: object) -> None:
    assert not validate_analysis(raw).accepted


def test_shape_only_checks_allow_out_of_range_scores_and_extra_fields(
    analysis_payload: dict,
) -> None:
    analysis_payload["layout"]["score"] = 140
    analysis_payload["lighting"]["score"] = -3.5
    analysis_payload["flow"]["feedback"] = []
    analysis_payload["summary"] = "Compact two-bedroom plan"
    analysis_payload["layout"]["confidence"] = "high"

    outcome = validate_analysis(analysis_payload)

    assert outcome.accepted
    assert outcome.result.layout.score == 140
    assert outcome.result.lighting.score == -3.5
    assert outcome.result.flow.feedback == ()
    assert "summary" not in outcome.result.to_payload()


def test_accepted_result_is_immutable(analysis_payload: dict) -> None:
    result = validate_analysis(analysis_payload).result

    with pytest.raises(Exception):
        result.layout.score = 10  # type: ignore[misc]
