"""Report assembly: Cucumber JSON text in, JUnit XML text out."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

from cucumber_junit.config import ConversionOptions
from cucumber_junit.converter import convert_feature
from cucumber_junit.models import TestSuite
from cucumber_junit.xml_writer import render

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """The raw report is not a JSON list of features."""


def parse_report(raw_report: str | bytes | None) -> list[dict]:
    """Parse report text; blank or missing input is an empty report.

    An empty report still renders one placeholder ``<testsuite />`` (see
    ``build_suites``), the same document as ``[]``, rather than a bare
    ``<testsuites>`` wrapper.
    """
    if raw_report is None:
        return []
    if isinstance(raw_report, bytes):
        raw_report = raw_report.decode("utf-8")
    if not raw_report.strip():
        return []
    try:
        features = json.loads(raw_report)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Report is not valid JSON: {exc}") from exc
    if not isinstance(features, list):
        raise ParseError(
            f"Report must be a JSON list of features, got {type(features).__name__}"
        )
    return features


def build_suites(
    features: list[dict], options: ConversionOptions | None = None
) -> list[TestSuite]:
    """Convert every feature in order.

    An empty result becomes a single placeholder suite so consumers always
    see at least one <testsuite>.
    """
    options = options or ConversionOptions()
    suites = [convert_feature(feature, options) for feature in features]
    if not suites:
        suites.append(TestSuite(placeholder=True))
    return suites


def build(
    raw_report: str | bytes | None, options: ConversionOptions | None = None
) -> list[TestSuite]:
    """Parse a raw report and convert it into test suites."""
    features = parse_report(raw_report)
    suites = build_suites(features, options)
    logger.debug("Assembled %d test suite(s) from %d feature(s)", len(suites), len(features))
    return suites


def render_report(
    suites: list[TestSuite], options: ConversionOptions | None = None
) -> str | Iterator[str]:
    """Serialize suites with the indent, declaration and stream options."""
    options = options or ConversionOptions()
    return render(
        suites,
        indent=options.indent,
        declaration=options.declaration,
        stream=options.stream,
    )


def assemble(
    raw_report: str | bytes | None,
    options: ConversionOptions | None = None,
) -> str | Iterator[str]:
    """Convert a raw Cucumber JSON report into a JUnit XML document."""
    options = options or ConversionOptions()
    return render_report(build(raw_report, options), options)
