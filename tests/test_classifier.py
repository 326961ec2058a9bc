"""Step classification tests."""

import pytest

from cucumber_junit.classifier import (
    SKIPPED_MESSAGE,
    classify,
    create_failure,
    create_skipped,
)
from cucumber_junit.models import Failure, ScenarioStatus, Skipped, StepStatus


def step(status, name="a step", error=None, duration=None):
    result = {"status": status}
    if error is not None:
        result["error_message"] = error
    if duration is not None:
        result["duration"] = duration
    return {"name": name, "result": result}


class TestStepStatus:
    def test_known_status(self) -> None:
        assert StepStatus.parse("pending") is StepStatus.PENDING

    def test_unknown_status(self) -> None:
        assert StepStatus.parse("exploded") is StepStatus.UNKNOWN

    def test_missing_status(self) -> None:
        assert StepStatus.parse(None) is StepStatus.UNKNOWN


class TestClassify:
    def test_all_passed_no_markers(self) -> None:
        outcome = classify([step("passed"), step("passed")], "S", "F")
        assert outcome.status is ScenarioStatus.PASSED
        assert outcome.markers == []

    def test_empty_steps_count_as_passed(self) -> None:
        outcome = classify([], "S", "F")
        assert outcome.status is ScenarioStatus.PASSED
        assert outcome.markers == []

    def test_pending_gives_one_skipped(self) -> None:
        steps = [step("passed"), step("pending"), step("pending")]
        outcome = classify(steps, "S", "F")
        assert outcome.status is ScenarioStatus.PENDING
        assert len(outcome.markers) == 1
        assert isinstance(outcome.markers[0], Skipped)

    def test_pending_wins_over_failed(self) -> None:
        steps = [step("failed", error="boom"), step("pending")]
        outcome = classify(steps, "S", "F")
        assert outcome.status is ScenarioStatus.PENDING
        assert [type(m) for m in outcome.markers] == [Skipped]

    def test_one_failure_per_failed_step(self) -> None:
        steps = [
            step("failed", name="first", error="first error\ntrace"),
            step("passed"),
            step("failed", name="second", error="second error"),
        ]
        outcome = classify(steps, "S", "F")
        assert outcome.status is ScenarioStatus.FAILED
        assert [m.message for m in outcome.markers] == ["first error", "second error"]
        assert all(isinstance(m, Failure) for m in outcome.markers)

    def test_only_undefined_has_no_marker(self) -> None:
        outcome = classify([step("undefined"), step("skipped")], "S", "F")
        assert outcome.status is ScenarioStatus.NONE
        assert outcome.markers == []

    def test_unknown_status_has_no_marker(self) -> None:
        outcome = classify([step("passed"), step("exploded")], "S", "F")
        assert outcome.status is ScenarioStatus.NONE

    def test_missing_result_raises(self) -> None:
        with pytest.raises(KeyError):
            classify([{"name": "broken"}], "S", "F")


class TestStrictMode:
    def test_undefined_becomes_failure(self) -> None:
        outcome = classify([step("passed"), step("undefined", name="missing")], "S", "F", strict=True)
        assert outcome.status is ScenarioStatus.FAILED
        assert len(outcome.markers) == 1
        assert outcome.markers[0].message == "Step undefined"

    def test_pending_becomes_failure(self) -> None:
        outcome = classify([step("pending", error="TODO\nlater")], "S", "F", strict=True)
        assert outcome.status is ScenarioStatus.FAILED
        assert outcome.markers[0].message == "TODO"

    def test_collects_all_failing_steps(self) -> None:
        steps = [step("failed", error="x"), step("pending"), step("undefined"), step("skipped")]
        outcome = classify(steps, "S", "F", strict=True)
        assert len(outcome.markers) == 3

    def test_all_passed_unaffected(self) -> None:
        outcome = classify([step("passed")], "S", "F", strict=True)
        assert outcome.markers == []

    def test_skipped_only_has_no_marker(self) -> None:
        outcome = classify([step("skipped")], "S", "F", strict=True)
        assert outcome.status is ScenarioStatus.NONE


class TestMarkers:
    def test_failure_message_is_first_line(self) -> None:
        failure = create_failure("Valid login", "Login", step("failed", "I log in", "expected true\nstack trace..."))
        assert failure.message == "expected true"

    def test_failure_body_layout(self) -> None:
        failure = create_failure("Valid login", "Login", step("failed", "I log in", "expected true\nstack trace..."))
        assert failure.body == (
            "Scenario: Valid login\nFeature: Login\nStep: I log in\n\n"
            "expected true\nstack trace..."
        )

    def test_failure_without_error_message(self) -> None:
        failure = create_failure("S", "F", step("failed"))
        assert failure.message == ""

    def test_skipped_marker(self) -> None:
        skipped = create_skipped("Valid login", "Login")
        assert skipped.message == SKIPPED_MESSAGE == "Scenario skipped"
        assert skipped.body == "Scenario: Valid login\nFeature: Login\n\nScenario skipped"
