"""
Project Service.

Holds the project opened in the console. The service is created once
per application and passed explicitly to whoever needs the active
project.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

from loguru import logger

from citrus_admin.build.commands import BuildCommand, BuildResult
from citrus_admin.exceptions import ApplicationRuntimeError
from citrus_admin.model.project import Project


class ProjectService:
    """
    Manages the active project.

    Usage::

        service = ProjectService()
        service.open("/work/my-citrus-tests")
        project = service.get_active_project()
    """

    def __init__(self, project: Optional[Project] = None) -> None:
        self._project = project
        self._lock = threading.Lock()

    def open(self, project_home: str | Path) -> Project:
        """
        Open a project directory and make it the active project.

        Settings are loaded from the project-info file when one exists.

        Raises:
            ApplicationRuntimeError: If the directory is not accessible or its
                project-info file is invalid.
        """
        project = Project(project_home)
        if project.project_info_file.exists():
            project.load_settings()
        else:
            logger.info(f"No project info file in {project.home} - using default settings")

        with self._lock:
            self._project = project
        logger.info(f"Active project: {project.name} ({project.home})")
        return project

    def has_active_project(self) -> bool:
        return self._project is not None

    def get_active_project(self) -> Project:
        """
        Return the active project.

        Raises:
            ApplicationRuntimeError: If no project has been opened.
        """
        project = self._project
        if project is None:
            raise ApplicationRuntimeError("No active project - open a project first")
        return project

    def save(self) -> Path:
        """Persist the active project's settings."""
        return self.get_active_project().save_settings()

    def build(self, test: Optional[str] = None) -> BuildResult:
        """Run the active project's build, optionally for a single test."""
        project = self.get_active_project()
        return BuildCommand.for_project(project, test).execute(project.home)
