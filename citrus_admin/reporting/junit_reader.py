"""
JUnit Report Reader.

Reads Surefire/Failsafe JUnit XML reports (``TEST-*.xml``) into a
TestReport. Both ``<testsuite>`` and ``<testsuites>`` roots are accepted.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from loguru import logger

from citrus_admin.model.report import TestReport, TestResult

REPORT_DIRECTORIES = ("target/failsafe-reports", "target/surefire-reports")


def find_report_directory(project_home: str | Path) -> Optional[Path]:
    """Return the first report directory under a project that holds JUnit reports."""
    for relative in REPORT_DIRECTORIES:
        directory = Path(project_home) / relative
        if directory.is_dir() and any(directory.glob("TEST-*.xml")):
            return directory
    return None


def read_reports(directory: str | Path, project_name: str = "") -> TestReport:
    """
    Read every ``TEST-*.xml`` file of a directory into a single report.

    Unparseable files are logged and skipped.
    """
    directory = Path(directory)
    results: List[TestResult] = []
    suite_names: List[str] = []
    duration_ms = 0
    latest: Optional[datetime] = None

    for report_file in sorted(directory.glob("TEST-*.xml")):
        try:
            root = ET.parse(report_file).getroot()
        except (OSError, ET.ParseError) as e:
            logger.warning(f"Skipping unreadable report {report_file}: {e}")
            continue

        suites = [root] if root.tag == "testsuite" else root.findall("testsuite")
        for suite in suites:
            suite_names.append(suite.get("name", report_file.stem))
            duration_ms += _millis(suite.get("time"))
            results.extend(_read_suite(suite))

        modified = datetime.fromtimestamp(report_file.stat().st_mtime)
        if latest is None or modified > latest:
            latest = modified

    logger.info(f"Read {len(results)} test results from {directory}")
    return TestReport.from_results(
        results,
        project_name=project_name,
        suite_name=suite_names[0] if len(suite_names) == 1 else "",
        execution_date=latest,
        duration=duration_ms,
    )


def _read_suite(suite: ET.Element) -> List[TestResult]:
    results = []
    for case in suite.findall("testcase"):
        failure = case.find("failure")
        if failure is None:
            failure = case.find("error")
        skipped = case.find("skipped") is not None

        results.append(TestResult(
            test_name=case.get("name", ""),
            class_name=case.get("classname", ""),
            success=failure is None and not skipped,
            skipped=skipped,
            duration_ms=_millis(case.get("time")),
            error_message=failure.get("message", "") if failure is not None else "",
            failure_type=failure.get("type", "") if failure is not None else "",
            stack_trace=(failure.text or "").strip() if failure is not None else "",
        ))
    return results


def _millis(seconds: Optional[str]) -> int:
    if not seconds:
        return 0
    try:
        return int(round(float(seconds.replace(",", "")) * 1000))
    except ValueError:
        return 0
