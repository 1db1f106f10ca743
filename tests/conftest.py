"""
Root conftest.py - Shared Pytest fixtures.

Provides fixtures for:
- Isolated system properties (no leakage between tests).
- Captured loguru warnings.
- Temporary project homes with Java/XML test sources.
- A temporary local Maven repository that artifacts can be installed into.
"""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Generator, Iterable, List, Optional

import pytest
from loguru import logger

from citrus_admin.build.maven import MavenCoordinate
from citrus_admin.config.provider import ConfigurationProvider


# ---------------------------------------------------------------------------
# Configuration Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_properties(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset process-wide property overrides and related environment variables."""
    for name in (
        "CITRUS_ADMIN_BASE_PACKAGE",
        "CITRUS_ADMIN_JAVA_SRC_DIRECTORY",
        "CITRUS_ADMIN_XML_SRC_DIRECTORY",
        "CITRUS_ADMIN_FRAMEWORK_VERSION",
        "CITRUS_ADMIN_BUILD_TOOL",
        "MAVEN_REPO_LOCAL",
    ):
        monkeypatch.delenv(name, raising=False)
    ConfigurationProvider.clear_properties()
    yield
    ConfigurationProvider.clear_properties()


@pytest.fixture
def log_messages() -> Generator[List[str], None, None]:
    """Collect WARNING and above log messages emitted during a test."""
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


# ---------------------------------------------------------------------------
# Project Fixtures
# ---------------------------------------------------------------------------


XML_TEST = """<?xml version="1.0" encoding="UTF-8"?>
<spring:beans xmlns="http://www.citrusframework.org/schema/testcase"
              xmlns:spring="http://www.springframework.org/schema/beans">
  <testcase name="{name}">
    <meta-info>
      <author>Christoph</author>
    </meta-info>
    <description>Sends a greeting</description>
    <actions>
      <echo>
        <message>Hello Citrus</message>
      </echo>
      <send endpoint="helloClient" fork="true">
        <message>
          <payload><greeting>Hello</greeting></payload>
        </message>
      </send>
      <receive endpoint="helloClient" timeout="5000"/>
      <sleep milliseconds="250"/>
      <purge-jms-queues connection-factory="cf"/>
    </actions>
  </testcase>
</spring:beans>
"""

JAVA_TEST = """package com.acme;

import com.consol.citrus.annotations.CitrusTest;

public class {name} extends TestNGCitrusTestDesigner {{

    @Test
    @CitrusTest(name = "{name}_Ok")
    public void sayHello() {{
        echo("Hello");
    }}

    @Test
    @CitrusTest
    public void sayGoodbye() {{
        echo("Bye");
    }}
}}
"""


def write_xml_test(home: Path, package: str, name: str) -> Path:
    directory = home / "src" / "test" / "resources" / Path(*package.split("."))
    directory.mkdir(parents=True, exist_ok=True)
    file = directory / f"{name}.xml"
    file.write_text(XML_TEST.format(name=name), encoding="utf-8")
    return file


def write_java_test(home: Path, package: str, name: str) -> Path:
    directory = home / "src" / "test" / "java" / Path(*package.split("."))
    directory.mkdir(parents=True, exist_ok=True)
    file = directory / f"{name}.java"
    file.write_text(JAVA_TEST.format(name=name), encoding="utf-8")
    return file


@pytest.fixture
def project_home(tmp_path: Path) -> Path:
    """An empty project home directory."""
    home = tmp_path / "project"
    home.mkdir()
    return home


@pytest.fixture
def sample_project_home(project_home: Path) -> Path:
    """A project home with one XML and one Java test source."""
    write_xml_test(project_home, "com.acme", "GreetingTest")
    write_java_test(project_home, "com.acme", "GreetingIT")
    return project_home


# ---------------------------------------------------------------------------
# Local Maven Repository
# ---------------------------------------------------------------------------


def _dependency_xml(dependency: str, scope: str) -> str:
    group_id, artifact_id, *version = dependency.split(":")
    return (
        "<dependency>"
        f"<groupId>{group_id}</groupId>"
        f"<artifactId>{artifact_id}</artifactId>"
        + "".join(f"<version>{v}</version>" for v in version)
        + ("<type>pom</type>" if scope == "import" else "")
        + (f"<scope>{scope}</scope>" if scope else "")
        + "</dependency>"
    )


def pom_xml(
    coordinate: MavenCoordinate,
    dependencies: Iterable[tuple[str, str]] = (),
    properties: Optional[dict] = None,
    managed: Iterable[tuple[str, str]] = (),
    parent: Optional[MavenCoordinate] = None,
    relative_path: Optional[str] = "",
) -> str:
    """
    Render a minimal POM.

    Dependencies and managed dependencies are (coordinate, scope) pairs;
    a coordinate may omit its version and scope may be empty. An empty
    ``relative_path`` disables the local parent lookup, None leaves the
    Maven default in place.
    """
    parent_xml = ""
    if parent is not None:
        relative = "" if relative_path is None else f"<relativePath>{relative_path}</relativePath>"
        parent_xml = (
            "<parent>"
            f"<groupId>{parent.group_id}</groupId>"
            f"<artifactId>{parent.artifact_id}</artifactId>"
            f"<version>{parent.version}</version>"
            f"{relative}"
            "</parent>"
        )
    deps = "".join(_dependency_xml(d, s) for d, s in dependencies)
    managed_deps = "".join(_dependency_xml(d, s) for d, s in managed)
    props = "".join(f"<{k}>{v}</{k}>" for k, v in (properties or {}).items())
    return (
        '<project xmlns="http://maven.apache.org/POM/4.0.0">'
        "<modelVersion>4.0.0</modelVersion>"
        f"{parent_xml}"
        f"<groupId>{coordinate.group_id}</groupId>"
        f"<artifactId>{coordinate.artifact_id}</artifactId>"
        f"<version>{coordinate.version}</version>"
        f"<properties>{props}</properties>"
        f"<dependencyManagement><dependencies>{managed_deps}</dependencies></dependencyManagement>"
        f"<dependencies>{deps}</dependencies>"
        "</project>"
    )


class LocalRepository:
    """Installs fake artifacts into a temporary local repository."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def install(
        self,
        coordinate: str,
        dependencies: Iterable[tuple[str, str]] = (),
        classes: Iterable[str] = (),
    ) -> Path:
        c = MavenCoordinate.parse(coordinate)
        jar = c.path_in(self.root)
        jar.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(jar, "w") as archive:
            archive.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
            for class_name in classes:
                archive.writestr(class_name.replace(".", "/") + ".class", b"\xca\xfe\xba\xbe")
        c.path_in(self.root, "pom").write_text(pom_xml(c, dependencies), encoding="utf-8")
        return jar

    def install_pom(self, coordinate: str, **pom: object) -> Path:
        """Install a POM-only artifact such as a parent or a BOM."""
        c = MavenCoordinate.parse(coordinate)
        pom_file = c.path_in(self.root, "pom")
        pom_file.parent.mkdir(parents=True, exist_ok=True)
        pom_file.write_text(pom_xml(c, **pom), encoding="utf-8")
        return pom_file


@pytest.fixture
def local_repo(tmp_path: Path) -> LocalRepository:
    """An empty local Maven repository."""
    root = tmp_path / "m2" / "repository"
    root.mkdir(parents=True)
    return LocalRepository(root)
