"""Scenario outcome classification from step results."""

from __future__ import annotations

from dataclasses import dataclass, field

from cucumber_junit.models import Failure, Marker, ScenarioStatus, Skipped, StepStatus

SKIPPED_MESSAGE = "Scenario skipped"

# Statuses reported as failures when strict mode is on.
STRICT_FAILING = frozenset(
    {StepStatus.FAILED, StepStatus.PENDING, StepStatus.UNDEFINED, StepStatus.AMBIGUOUS}
)


@dataclass
class Classification:
    status: ScenarioStatus
    markers: list[Marker] = field(default_factory=list)


def step_status(step: dict) -> StepStatus:
    return StepStatus.parse(step["result"].get("status"))


def create_failure(scenario: str, feature: str, step: dict) -> Failure:
    """Build the failure marker for one step.

    The message is the first line of the step's error; the body repeats the
    scenario, feature and step names ahead of the full error text.
    """
    error = step["result"].get("error_message")
    if error is None:
        status = step["result"].get("status")
        error = "" if status == StepStatus.FAILED.value else f"Step {status}"
    return Failure(
        message=error.split("\n", 1)[0],
        body=f"Scenario: {scenario}\nFeature: {feature}\nStep: {step.get('name', '')}\n\n{error}",
    )


def create_skipped(scenario: str, feature: str) -> Skipped:
    return Skipped(
        message=SKIPPED_MESSAGE,
        body=f"Scenario: {scenario}\nFeature: {feature}\n\n{SKIPPED_MESSAGE}",
    )


def classify(
    steps: list[dict],
    scenario_name: str,
    feature_name: str,
    strict: bool = False,
) -> Classification:
    """Decide the scenario outcome and the markers it carries.

    Checked in order: every step passed, any step pending, any step failed.
    Anything else (e.g. only undefined steps) gets no marker. In strict mode
    pending, undefined and ambiguous steps are reported as failures instead.
    """
    statuses = [step_status(step) for step in steps]

    if all(status is StepStatus.PASSED for status in statuses):
        return Classification(ScenarioStatus.PASSED)

    if strict:
        failing = [s for s, status in zip(steps, statuses) if status in STRICT_FAILING]
        if failing:
            return Classification(
                ScenarioStatus.FAILED,
                [create_failure(scenario_name, feature_name, s) for s in failing],
            )
        return Classification(ScenarioStatus.NONE)

    if StepStatus.PENDING in statuses:
        return Classification(
            ScenarioStatus.PENDING, [create_skipped(scenario_name, feature_name)]
        )

    failed = [s for s, status in zip(steps, statuses) if status is StepStatus.FAILED]
    if failed:
        return Classification(
            ScenarioStatus.FAILED,
            [create_failure(scenario_name, feature_name, s) for s in failed],
        )

    return Classification(ScenarioStatus.NONE)
