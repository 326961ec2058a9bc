"""Step statuses and the JUnit-side result records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

logger = logging.getLogger(__name__)


class StepStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"
    UNDEFINED = "undefined"
    SKIPPED = "skipped"
    AMBIGUOUS = "ambiguous"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: object) -> StepStatus:
        """Map a raw status string onto the enum, falling back to UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            logger.debug("Unrecognised step status %r", value)
            return cls.UNKNOWN


class ScenarioStatus(str, Enum):
    PASSED = "passed"
    PENDING = "pending"
    FAILED = "failed"
    NONE = "none"


@dataclass(frozen=True)
class Failure:
    message: str
    body: str


@dataclass(frozen=True)
class Skipped:
    message: str
    body: str


Marker = Union[Failure, Skipped]


@dataclass
class TestCase:
    name: str
    time: float = 0.0
    markers: list[Marker] = field(default_factory=list)
    status: ScenarioStatus = ScenarioStatus.PASSED

    __test__ = False

    @property
    def failed(self) -> bool:
        return self.status is ScenarioStatus.FAILED

    @property
    def skipped(self) -> bool:
        return self.status is ScenarioStatus.PENDING


@dataclass
class TestSuite:
    """One ``<testsuite>``; ``placeholder`` suites render with no attributes."""

    name: str = ""
    tests: int = 0
    failures: int = 0
    skipped: int = 0
    time: float = 0.0
    testcases: list[TestCase] = field(default_factory=list)
    placeholder: bool = False

    __test__ = False
