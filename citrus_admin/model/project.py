"""
Project facade.

A Project is a directory holding a Citrus test project. It knows its
derived source locations, its build tool nature, its persisted
project-info file and the classpath of its compiled tests.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from citrus_admin.build.classloader import LoadedClass, ProjectClassLoader
from citrus_admin.build.maven import DependencyResolver, MavenCoordinate
from citrus_admin.config.schema_registry import SchemaRegistry, SchemaValidationError
from citrus_admin.config.version_compat import ProjectInfoMigrator
from citrus_admin.exceptions import ApplicationRuntimeError, ConfigurationError
from citrus_admin.model.settings import ProjectSettings

PROJECT_INFO_FILENAME = "citrus-project.json"
PROJECT_INFO_SCHEMA = "project_info_schema"

FRAMEWORK_GROUP_ID = "com.consol.citrus"
FRAMEWORK_PATH_MARKER = "com/consol/citrus/"

# Framework modules put on every Maven project classpath
FRAMEWORK_MODULES = [
    "citrus-core",
    "citrus-jms",
    "citrus-jdbc",
    "citrus-http",
    "citrus-websocket",
    "citrus-ws",
    "citrus-ftp",
    "citrus-ssh",
    "citrus-camel",
    "citrus-docker",
    "citrus-kubernetes",
    "citrus-selenium",
    "citrus-zookeeper",
    "citrus-cucumber",
    "citrus-rmi",
    "citrus-jmx",
    "citrus-restdocs",
    "citrus-mail",
    "citrus-vertx",
    "citrus-java-dsl",
]


class Project:
    """
    A test project rooted at a home directory.

    The home directory is canonicalized once at construction. The class
    loader is built on first use and shared by every later caller.

    Usage::

        project = Project("/work/my-citrus-tests")
        project.load_settings()
        config = project.get_spring_java_config()
    """

    def __init__(
        self,
        project_home: str | Path,
        settings: Optional[ProjectSettings] = None,
        resolver: Optional[DependencyResolver] = None,
    ) -> None:
        """
        Args:
            project_home: Project root directory.
            settings: Initial settings. Defaults are resolved from system properties.
            resolver: Dependency resolver used for Maven projects.

        Raises:
            ApplicationRuntimeError: If the home directory does not exist or is unreadable.
        """
        try:
            home = Path(project_home).expanduser().resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise ApplicationRuntimeError(
                f"Unable to access project home directory: {project_home}"
            ) from e
        if not home.is_dir():
            raise ApplicationRuntimeError(f"Project home is not a directory: {home}")
        try:
            next(home.iterdir(), None)
        except OSError as e:
            raise ApplicationRuntimeError(f"Unable to read project home directory: {home}") from e

        self._home = home
        self.name: Optional[str] = home.name
        self.description: Optional[str] = None
        self.version = "1.0.0"
        self.settings = settings or ProjectSettings.load()

        self._resolver = resolver
        self._class_loader: Optional[ProjectClassLoader] = None
        self._spring_java_config: Optional[LoadedClass] = None
        self._lock = threading.Lock()

        logger.info(f"Project initialized - home={self._home}")

    @property
    def home(self) -> Path:
        return self._home

    @property
    def project_home(self) -> str:
        return str(self._home)

    # ------------------------------------------------------------------
    # Build tool nature
    # ------------------------------------------------------------------

    def is_maven_project(self) -> bool:
        """Check for a ``pom.xml`` directly under project home."""
        return self._has_file("pom.xml")

    def is_ant_project(self) -> bool:
        """Check for a ``build.xml`` directly under project home."""
        return self._has_file("build.xml")

    def get_maven_pom_file(self) -> Path:
        if not self.is_maven_project():
            raise ApplicationRuntimeError("Failed to get Maven POM file - project is not a Maven project")
        return self._home / "pom.xml"

    def get_ant_build_file(self) -> Path:
        if not self.is_ant_project():
            raise ApplicationRuntimeError("Failed to get ANT build file - project is not a ANT project")
        return self._home / "build.xml"

    def _has_file(self, name: str) -> bool:
        # Exact, case-sensitive match even on case-insensitive file systems
        try:
            return any(p.name == name and p.is_file() for p in self._home.iterdir())
        except OSError:
            return False

    # ------------------------------------------------------------------
    # Source locations
    # ------------------------------------------------------------------

    @property
    def project_info_file(self) -> Path:
        return self._home / PROJECT_INFO_FILENAME

    @property
    def java_directory(self) -> str:
        return str(self._home) + "/" + self.settings.java_src_directory.replace("\\", "/")

    @property
    def xml_directory(self) -> str:
        return str(self._home) + "/" + self.settings.xml_src_directory.replace("\\", "/")

    def get_absolute_path(self, file_path: str) -> str:
        """Resolve a source-root relative file path."""
        if file_path.endswith(".java"):
            return self.java_directory + file_path
        return self.xml_directory + file_path

    # ------------------------------------------------------------------
    # Project info persistence
    # ------------------------------------------------------------------

    def load_settings(self) -> None:
        """
        Load name, description, version and settings from the project-info file.

        Older documents are migrated to the current schema version before
        validation.

        Raises:
            ConfigurationError: If the file is missing, unreadable or malformed.
        """
        info_file = self.project_info_file
        try:
            content = info_file.read_text(encoding="utf-8")
            info = json.loads(content)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to read project settings file {info_file}") from e

        if not isinstance(info, dict):
            raise ConfigurationError(
                f"Project settings file must contain an object, got {type(info).__name__}"
            )

        try:
            info = ProjectInfoMigrator().migrate(info)
            SchemaRegistry().validate(info, PROJECT_INFO_SCHEMA)
            settings = ProjectSettings.from_dict(info.get("settings") or {})
        except (SchemaValidationError, ValueError) as e:
            raise ConfigurationError(f"Invalid project settings file {info_file}: {e}") from e

        self.name = info.get("name")
        self.description = info.get("description")
        self.settings = settings
        self.version = info.get("version") or "1.0.0"
        logger.info(f"Project settings loaded - name={self.name}, version={self.version}")

    def save_settings(self) -> Path:
        """Write the project-info file at the current schema version."""
        info = {"schema_version": ProjectInfoMigrator.CURRENT_VERSION, **self.to_dict()}
        info.pop("projectHome", None)
        try:
            self.project_info_file.write_text(json.dumps(info, indent=2), encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to write project settings file {self.project_info_file}") from e
        logger.info(f"Project settings saved: {self.project_info_file}")
        return self.project_info_file

    # ------------------------------------------------------------------
    # Classpath
    # ------------------------------------------------------------------

    def get_class_loader(self) -> ProjectClassLoader:
        """
        Provide the project class loader.

        The classpath starts with ``target/classes`` and ``target/test-classes``.
        Maven projects add the framework artifacts and the project's runtime
        and test dependencies, resolved offline. Built once per project.

        Raises:
            DependencyResolutionError: If the project POM cannot be read.
        """
        if self._class_loader is not None:
            return self._class_loader

        with self._lock:
            if self._class_loader is None:
                self._class_loader = ProjectClassLoader(self.get_classpath())
        return self._class_loader

    def get_classpath(self) -> List[Path]:
        """Compute the classpath entries for this project."""
        classpath: List[Path] = [
            self._home / "target" / "classes",
            self._home / "target" / "test-classes",
        ]

        if self.is_maven_project():
            resolver = self._resolver or DependencyResolver()
            framework_jars = resolver.resolve(self.get_framework_artifacts())
            framework_set = {str(p) for p in framework_jars}
            classpath.extend(framework_jars)

            for dependency in resolver.resolve_pom(self.get_maven_pom_file()):
                path = str(dependency)
                if FRAMEWORK_PATH_MARKER in path.replace("\\", "/"):
                    continue
                if path in framework_set:
                    continue
                classpath.append(dependency)

        logger.debug("Loading test project classes ...")
        for entry in classpath:
            logger.debug(f"  {entry}")
        return classpath

    def get_framework_artifacts(self) -> List[MavenCoordinate]:
        """All framework artifact coordinates for the configured framework version."""
        return [
            MavenCoordinate(FRAMEWORK_GROUP_ID, module, self.settings.framework_version)
            for module in FRAMEWORK_MODULES
        ]

    def get_spring_java_config(self) -> LoadedClass:
        """
        Load the configured Spring Java config class from the project classpath.

        Raises:
            ApplicationRuntimeError: If the class cannot be loaded.
        """
        if self._spring_java_config is None:
            try:
                self._spring_java_config = self.get_class_loader().load_class(
                    self.settings.spring_java_config
                )
            except ApplicationRuntimeError as e:
                raise ApplicationRuntimeError("Failed to access Spring Java config class") from e
        return self._spring_java_config

    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projectHome": self.project_home,
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "settings": self.settings.to_dict(),
        }

    def __repr__(self) -> str:
        return f"Project(home={self._home!s}, name={self.name!r})"
