"""Feature -> <testsuite> and scenario -> <testcase> conversion."""

from __future__ import annotations

import logging

from cucumber_junit.classifier import classify
from cucumber_junit.config import ConversionOptions
from cucumber_junit.models import TestCase, TestSuite

logger = logging.getLogger(__name__)

BACKGROUND = "background"


def feature_key(scenario: dict) -> str:
    """Return the feature part of a scenario id (text before the first ';')."""
    return scenario.get("id", "").split(";", 1)[0]


def scenario_time(steps: list[dict], divisor: float) -> float:
    """Sum the step durations in seconds; steps without one add nothing."""
    total = 0.0
    for step in steps:
        duration = step["result"].get("duration")
        if duration:
            total += duration / divisor
    return total


def convert_scenario(
    scenario: dict,
    options: ConversionOptions | None = None,
    feature_name: str | None = None,
) -> TestCase:
    """Convert one scenario into a test case."""
    options = options or ConversionOptions()
    steps = scenario.get("steps") or []
    name = scenario.get("name", "")

    if feature_name is None:
        feature_name = feature_key(scenario)

    outcome = classify(steps, name, feature_name, strict=options.strict)
    return TestCase(
        name=options.prefix + name,
        time=scenario_time(steps, options.duration_divisor),
        markers=outcome.markers,
        status=outcome.status,
    )


def convert_feature(feature: dict, options: ConversionOptions | None = None) -> TestSuite:
    """Convert one feature into a test suite, skipping background blocks."""
    options = options or ConversionOptions()
    name = feature.get("name", "")
    scenarios = [
        s for s in feature.get("elements") or [] if s.get("type") != BACKGROUND
    ]

    testcases: list[TestCase] = []
    tests = failures = skipped = 0
    time = 0.0
    for scenario in scenarios:
        case = convert_scenario(scenario, options, feature_name=name)
        tests += 1
        failures += int(case.failed)
        skipped += int(case.skipped)
        time += case.time
        testcases.append(case)

    logger.debug(
        "Feature %r: %d tests, %d failures, %d skipped", name, tests, failures, skipped
    )
    return TestSuite(
        name=options.prefix + name,
        tests=tests,
        failures=failures,
        skipped=skipped,
        time=time,
        testcases=testcases,
    )
