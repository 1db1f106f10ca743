"""
Service Module.

Services used by the web controllers:
- ProjectService: the active project and its build.
- TestCaseService: test discovery, details and source code.
- ReportService: test run reports.
"""

from citrus_admin.services.project_service import ProjectService
from citrus_admin.services.report_service import ReportService
from citrus_admin.services.test_case_service import TestCaseService

__all__ = ["ProjectService", "ReportService", "TestCaseService"]
