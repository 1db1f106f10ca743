"""
Report Service.

Provides the latest test report of a project from its build output.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from citrus_admin.model.project import Project
from citrus_admin.model.report import TestReport
from citrus_admin.reporting.junit_reader import find_report_directory, read_reports


class ReportService:

    def get_latest(self, project: Project) -> Optional[TestReport]:
        """Read the project's latest JUnit reports, or None when there are none."""
        directory = find_report_directory(project.home)
        if directory is None:
            logger.info(f"No test reports found for project {project.name}")
            return None
        return read_reports(directory, project_name=project.name or "")
