"""
Build Commands.

Builds and executes Maven/Ant command lines for a project's build
configuration. Output is streamed to the log line by line; execution
blocks until the build tool exits.
"""

from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from loguru import logger

from citrus_admin.exceptions import ApplicationRuntimeError, BuildExecutionError
from citrus_admin.model.settings import (
    AntBuildConfiguration,
    BuildConfiguration,
    MavenBuildConfiguration,
)

if TYPE_CHECKING:
    from citrus_admin.model.project import Project


@dataclass
class BuildResult:
    """Outcome of a build tool invocation."""

    command: List[str]
    exit_code: int
    output: List[str] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def is_success(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> dict:
        return {
            "command": " ".join(self.command),
            "exitCode": self.exit_code,
            "success": self.is_success,
            "durationMs": round(self.duration_ms, 3),
        }


class BuildCommand:
    """
    A build tool command line.

    Usage::

        command = BuildCommand.for_project(project, test="com.acme.MyIT")
        result = command.execute(project.home)
    """

    def __init__(self, args: List[str]) -> None:
        self.args = args

    @classmethod
    def for_project(cls, project: "Project", test: Optional[str] = None) -> "BuildCommand":
        """Create the command matching the project's build configuration."""
        return cls.for_configuration(project.settings.build, test)

    @classmethod
    def for_configuration(
        cls, build: BuildConfiguration, test: Optional[str] = None
    ) -> "BuildCommand":
        if isinstance(build, MavenBuildConfiguration):
            return cls(cls._maven_args(build, test))
        if isinstance(build, AntBuildConfiguration):
            return cls(cls._ant_args(build, test))
        raise ApplicationRuntimeError(f"Unsupported build configuration: {build.type}")

    @staticmethod
    def _maven_args(build: MavenBuildConfiguration, test: Optional[str]) -> List[str]:
        args = [build.command or "mvn"]
        if build.clean:
            args.append("clean")
        if build.compile:
            args.append("compile")

        failsafe = build.test_plugin == "maven-failsafe"
        args.append("integration-test" if failsafe else "test")

        if build.profiles:
            args.append(f"-P{build.profiles}")
        if test:
            args.append(f"-D{'it.test' if failsafe else 'test'}={test}")
        args.extend(f"-D{p.name}={p.value}" for p in build.properties)
        return args

    @staticmethod
    def _ant_args(build: AntBuildConfiguration, test: Optional[str]) -> List[str]:
        args = ["ant", "-buildfile", build.build_file, build.execute_target]
        if test:
            args.append(f"-Dtest={test}")
        args.extend(f"-D{p.name}={p.value}" for p in build.properties)
        return args

    def execute(self, cwd: str | Path) -> BuildResult:
        """
        Run the command in the given working directory.

        Raises:
            BuildExecutionError: If the build tool cannot be started.
        """
        logger.info(f"Executing build: {' '.join(self.args)} (cwd={cwd})")
        start_time = time.perf_counter()
        output: List[str] = []

        try:
            process = subprocess.Popen(
                self.args,
                cwd=str(cwd),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            raise BuildExecutionError(f"Failed to start build tool '{self.args[0]}': {e}") from e

        assert process.stdout is not None
        for line in process.stdout:
            line = line.rstrip()
            output.append(line)
            logger.debug(f"[build] {line}")

        exit_code = process.wait()
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        if exit_code == 0:
            logger.info(f"Build completed in {elapsed_ms:.1f}ms")
        else:
            logger.warning(f"Build failed with exit code {exit_code} after {elapsed_ms:.1f}ms")

        return BuildResult(
            command=list(self.args),
            exit_code=exit_code,
            output=output,
            duration_ms=elapsed_ms,
        )

    def __str__(self) -> str:
        return " ".join(self.args)
