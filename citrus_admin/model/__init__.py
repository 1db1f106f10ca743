"""
Domain Model Module.

Contains:
- Project: the test project facade (paths, build nature, settings, classpath).
- ProjectSettings: per-project settings and build tool configuration.
- Test case models shown by the console (packages, details, actions).
- Test run reports.
"""

from citrus_admin.model.project import PROJECT_INFO_FILENAME, Project
from citrus_admin.model.report import TestReport, TestResult
from citrus_admin.model.settings import (
    AntBuildConfiguration,
    BuildConfiguration,
    BuildProperty,
    MavenBuildConfiguration,
    ProjectSettings,
)
from citrus_admin.model.testcase import (
    Property,
    TestAction,
    TestCase,
    TestDetail,
    TestPackage,
    TestType,
)

__all__ = [
    "PROJECT_INFO_FILENAME",
    "AntBuildConfiguration",
    "BuildConfiguration",
    "BuildProperty",
    "MavenBuildConfiguration",
    "Project",
    "ProjectSettings",
    "Property",
    "TestAction",
    "TestCase",
    "TestDetail",
    "TestPackage",
    "TestReport",
    "TestResult",
    "TestType",
]
