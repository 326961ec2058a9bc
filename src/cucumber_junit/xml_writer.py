"""JUnit XML output built with ElementTree."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from decimal import Decimal
from xml.sax.saxutils import quoteattr

from cucumber_junit.config import DEFAULT_INDENT
from cucumber_junit.models import Failure, TestCase, TestSuite

# Anything outside the XML 1.0 Char production (e.g. ANSI colour escapes).
_ILLEGAL_XML_CHARS = re.compile(
    "[^\t\n\r"
    + chr(0x20) + "-" + chr(0xD7FF)
    + chr(0xE000) + "-" + chr(0xFFFD)
    + chr(0x10000) + "-" + chr(0x10FFFF)
    + "]"
)


def xml_safe(text: str) -> str:
    """Drop characters that cannot appear in an XML 1.0 document."""
    return _ILLEGAL_XML_CHARS.sub("", text)


def format_seconds(value: float) -> str:
    """Render a duration as a plain decimal: 3.0 -> "3", 5e-05 -> "0.00005"."""
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")


def _testcase_element(parent: ET.Element, case: TestCase) -> ET.Element:
    testcase = ET.SubElement(parent, "testcase")
    testcase.set("name", xml_safe(case.name))
    testcase.set("time", format_seconds(case.time))
    for marker in case.markers:
        tag = "failure" if isinstance(marker, Failure) else "skipped"
        child = ET.SubElement(testcase, tag)
        child.set("message", xml_safe(marker.message))
        child.text = xml_safe(marker.body)
    return testcase


def _testsuite_element(parent: ET.Element, suite: TestSuite) -> ET.Element:
    testsuite = ET.SubElement(parent, "testsuite")
    if suite.placeholder:
        return testsuite
    testsuite.set("name", xml_safe(suite.name))
    testsuite.set("time", format_seconds(suite.time))
    testsuite.set("tests", str(suite.tests))
    testsuite.set("failures", str(suite.failures))
    testsuite.set("skipped", str(suite.skipped))
    for case in suite.testcases:
        _testcase_element(testsuite, case)
    return testsuite


def to_element(suites: list[TestSuite]) -> ET.Element:
    """Wrap every suite in a single <testsuites> root."""
    root = ET.Element("testsuites")
    for suite in suites:
        _testsuite_element(root, suite)
    return root


def _resolve_indent(indent: str | bool | None) -> str:
    if indent is True:
        return DEFAULT_INDENT
    if not indent:
        return ""
    return indent


def xml_declaration(declaration: dict | bool | None = True) -> str:
    """Build the ``<?xml ...?>`` line, or "" when disabled."""
    if declaration is False or declaration is None:
        return ""
    attrs = declaration if isinstance(declaration, dict) else {}
    parts = [
        f"version={quoteattr(str(attrs.get('version', '1.0')))}",
        f"encoding={quoteattr(str(attrs.get('encoding', 'UTF-8')))}",
    ]
    if attrs.get("standalone") is not None:
        standalone = attrs["standalone"]
        if isinstance(standalone, bool):
            standalone = "yes" if standalone else "no"
        parts.append(f"standalone={quoteattr(str(standalone))}")
    return f"<?xml {' '.join(parts)}?>"


def iter_render(
    suites: list[TestSuite],
    indent: str | bool | None = DEFAULT_INDENT,
    declaration: dict | bool | None = True,
) -> Iterator[str]:
    """Yield the document piece by piece: declaration, root tags, each suite."""
    space = _resolve_indent(indent)
    newline = "\n" if space else ""
    root = to_element(suites)

    header = xml_declaration(declaration)
    if header:
        yield header + newline

    if not len(root):
        yield "<testsuites />"
        return

    yield "<testsuites>" + newline
    for element in root:
        if space:
            ET.indent(element, space=space, level=1)
        yield space + ET.tostring(element, encoding="unicode").rstrip() + newline
    yield "</testsuites>"


def render(
    suites: list[TestSuite],
    indent: str | bool | None = DEFAULT_INDENT,
    declaration: dict | bool | None = True,
    stream: bool = False,
) -> str | Iterator[str]:
    """Serialize suites to JUnit XML text (or an iterator of chunks when streaming)."""
    chunks = iter_render(suites, indent=indent, declaration=declaration)
    if stream:
        return chunks
    return "".join(chunks)
