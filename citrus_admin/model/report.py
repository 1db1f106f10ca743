"""
Test run report models.

A TestReport summarizes one test run; it is immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Tuple


@dataclass(frozen=True)
class TestResult:
    """
    Result of a single test execution.

    Attributes:
        test_name: Test case name.
        class_name: Fully qualified name of the class that ran the test.
        success: Whether the test passed.
        skipped: Whether the test was skipped.
        duration_ms: Execution time in milliseconds.
        error_message: Failure message if the test failed.
        failure_type: Exception type reported for the failure.
        stack_trace: Full failure trace if available.
    """

    __test__ = False

    test_name: str
    class_name: str = ""
    success: bool = True
    skipped: bool = False
    duration_ms: int = 0
    error_message: str = ""
    failure_type: str = ""
    stack_trace: str = ""

    @property
    def failed(self) -> bool:
        return not self.success and not self.skipped

    def to_dict(self) -> Dict[str, Any]:
        return {
            "test": self.test_name,
            "className": self.class_name,
            "success": self.success,
            "skipped": self.skipped,
            "durationMs": self.duration_ms,
            "errorMessage": self.error_message,
            "failureType": self.failure_type,
            "stackTrace": self.stack_trace,
        }


@dataclass(frozen=True)
class TestReport:
    """Summary of a test run."""

    __test__ = False

    project_name: str = ""
    suite_name: str = ""
    execution_date: datetime = field(default_factory=datetime.now)
    passed: int = 0
    skipped: int = 0
    failed: int = 0
    total: int = 0
    duration: int = 0
    groups: str = ""
    results: Tuple[TestResult, ...] = ()

    @classmethod
    def from_results(
        cls,
        results: Iterable[TestResult],
        project_name: str = "",
        suite_name: str = "",
        execution_date: Optional[datetime] = None,
        groups: str = "",
        duration: Optional[int] = None,
    ) -> "TestReport":
        """Build a report deriving counts and duration from the individual results."""
        ordered = tuple(results)
        skipped = sum(1 for r in ordered if r.skipped)
        failed = sum(1 for r in ordered if r.failed)
        return cls(
            project_name=project_name,
            suite_name=suite_name,
            execution_date=execution_date or datetime.now(),
            passed=len(ordered) - skipped - failed,
            skipped=skipped,
            failed=failed,
            total=len(ordered),
            duration=duration if duration is not None else sum(r.duration_ms for r in ordered),
            groups=groups,
            results=ordered,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "executionDate": self.execution_date.isoformat(),
            "projectName": self.project_name,
            "suiteName": self.suite_name,
            "passed": self.passed,
            "skipped": self.skipped,
            "failed": self.failed,
            "total": self.total,
            "duration": self.duration,
            "groups": self.groups,
            "results": [r.to_dict() for r in self.results],
        }
