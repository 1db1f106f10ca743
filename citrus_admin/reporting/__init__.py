"""
Reporting Module.

Reads test run results produced by the project's build into TestReports.
"""

from citrus_admin.reporting.junit_reader import find_report_directory, read_reports

__all__ = ["find_report_directory", "read_reports"]
