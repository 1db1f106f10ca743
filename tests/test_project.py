"""
Tests for the Project facade and ProjectSettings.

Covers:
- Home directory canonicalization and fail-fast construction.
- Build tool nature detection.
- Project-info loading (including legacy documents) and saving.
- Class loader construction, memoization and Spring config lookup.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import List

import pytest

from citrus_admin.build.maven import DependencyResolver, MavenCoordinate
from citrus_admin.config.provider import BASE_PACKAGE, BUILD_TOOL, ConfigurationProvider
from citrus_admin.exceptions import ApplicationRuntimeError, ConfigurationError
from citrus_admin.model.project import PROJECT_INFO_FILENAME, Project
from citrus_admin.model.settings import (
    AntBuildConfiguration,
    BuildConfiguration,
    MavenBuildConfiguration,
    ProjectSettings,
)
from citrus_admin.services.project_service import ProjectService
from tests.conftest import LocalRepository, pom_xml


def _write_info(home: Path, info: dict) -> None:
    (home / PROJECT_INFO_FILENAME).write_text(json.dumps(info), encoding="utf-8")


# ---------------------------------------------------------------------------
# ProjectSettings Tests
# ---------------------------------------------------------------------------


class TestProjectSettings:

    def test_defaults(self) -> None:
        settings = ProjectSettings.load()
        assert settings.base_package == "com.consol.citrus"
        assert settings.java_src_directory.startswith("src")
        assert isinstance(settings.build, MavenBuildConfiguration)

    def test_defaults_from_system_properties(self) -> None:
        ConfigurationProvider.set_property(BASE_PACKAGE, "com.acme")
        ConfigurationProvider.set_property(BUILD_TOOL, "ant")

        settings = ProjectSettings.load()

        assert settings.base_package == "com.acme"
        assert isinstance(settings.build, AntBuildConfiguration)

    def test_dict_round_trip(self) -> None:
        settings = ProjectSettings.load()
        settings.build = AntBuildConfiguration(execute_target="run.single")

        restored = ProjectSettings.from_dict(settings.to_dict())

        assert restored == settings

    def test_non_boolean_flag(self) -> None:
        with pytest.raises(ValueError, match="clean"):
            BuildConfiguration.from_dict({"type": "maven", "clean": "false"})

    def test_unknown_build_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown build type"):
            BuildConfiguration.from_dict({"type": "gradle"})


# ---------------------------------------------------------------------------
# Project Tests
# ---------------------------------------------------------------------------


class TestProjectConstruction:

    def test_home_is_canonicalized(self, project_home: Path) -> None:
        (project_home / "sub").mkdir()
        project = Project(project_home / "sub" / "..")
        assert project.home == project_home.resolve()

    def test_missing_home_fails_fast(self, tmp_path: Path) -> None:
        with pytest.raises(ApplicationRuntimeError, match="Unable to access project home"):
            Project(tmp_path / "missing")

    def test_file_as_home_fails(self, tmp_path: Path) -> None:
        file = tmp_path / "file.txt"
        file.write_text("x")
        with pytest.raises(ApplicationRuntimeError, match="not a directory"):
            Project(file)

    def test_default_version(self, project_home: Path) -> None:
        assert Project(project_home).version == "1.0.0"


class TestProjectNature:

    def test_maven_project(self, project_home: Path) -> None:
        (project_home / "pom.xml").write_text("<project/>")
        project = Project(project_home)
        assert project.is_maven_project()
        assert not project.is_ant_project()
        assert project.get_maven_pom_file() == project.home / "pom.xml"

    def test_ant_project(self, project_home: Path) -> None:
        (project_home / "build.xml").write_text("<project/>")
        project = Project(project_home)
        assert project.is_ant_project()
        assert project.get_ant_build_file().name == "build.xml"

    def test_nested_pom_not_detected(self, project_home: Path) -> None:
        (project_home / "module").mkdir()
        (project_home / "module" / "pom.xml").write_text("<project/>")
        assert not Project(project_home).is_maven_project()

    def test_case_sensitive_match(self, project_home: Path) -> None:
        (project_home / "POM.XML").write_text("<project/>")
        assert not Project(project_home).is_maven_project()

    def test_pom_file_required(self, project_home: Path) -> None:
        with pytest.raises(ApplicationRuntimeError, match="not a Maven project"):
            Project(project_home).get_maven_pom_file()

    def test_absolute_paths(self, project_home: Path) -> None:
        project = Project(project_home)
        assert project.get_absolute_path("com/acme/FooIT.java").endswith("src/test/java/com/acme/FooIT.java")
        assert project.get_absolute_path("com/acme/FooTest.xml").endswith("src/test/resources/com/acme/FooTest.xml")


class TestProjectSettingsFile:

    def test_load_settings(self, project_home: Path) -> None:
        _write_info(project_home, {
            "schema_version": "2.0.0",
            "name": "demo",
            "description": "Demo project",
            "version": "2.1.0",
            "settings": {"basePackage": "com.acme", "build": {"type": "ant", "buildFile": "run.xml"}},
        })
        project = Project(project_home)

        project.load_settings()

        assert project.name == "demo"
        assert project.description == "Demo project"
        assert project.version == "2.1.0"
        assert project.settings.base_package == "com.acme"
        assert isinstance(project.settings.build, AntBuildConfiguration)
        assert project.settings.build.build_file == "run.xml"

    def test_legacy_build_class_is_replaced(self, project_home: Path) -> None:
        _write_info(project_home, {
            "name": "legacy",
            "settings": {
                "build": {
                    "@class": "com.consol.citrus.admin.model.build.maven.MavenBuildConfiguration",
                    "testPlugin": "maven-surefire",
                    "clean": True,
                }
            },
        })
        project = Project(project_home)

        project.load_settings()

        assert type(project.settings.build) is MavenBuildConfiguration
        assert project.settings.build.test_plugin == "maven-surefire"
        assert project.settings.build.clean is True

    def test_boolean_build_flags(self, project_home: Path) -> None:
        _write_info(project_home, {
            "schema_version": "2.0.0",
            "settings": {"build": {"type": "maven", "clean": False, "compile": False}},
        })
        project = Project(project_home)

        project.load_settings()

        assert project.settings.build.clean is False
        assert project.settings.build.compile is False

    @pytest.mark.parametrize("flag", ["clean", "compile", "useClassFile"])
    def test_string_build_flag_rejected(self, project_home: Path, flag: str) -> None:
        _write_info(project_home, {
            "schema_version": "2.0.0",
            "settings": {"build": {"type": "maven", flag: "false"}},
        })
        project = Project(project_home)

        with pytest.raises(ConfigurationError, match=flag):
            project.load_settings()
        assert project.settings.build.clean is False

    def test_non_string_build_file_rejected(self, project_home: Path) -> None:
        _write_info(project_home, {
            "schema_version": "2.0.0",
            "settings": {"build": {"type": "ant", "buildFile": 42}},
        })
        with pytest.raises(ConfigurationError, match="buildFile"):
            Project(project_home).load_settings()

    def test_missing_file(self, project_home: Path) -> None:
        with pytest.raises(ConfigurationError, match="Failed to read project settings"):
            Project(project_home).load_settings()

    def test_malformed_file(self, project_home: Path) -> None:
        (project_home / PROJECT_INFO_FILENAME).write_text("{not json")
        with pytest.raises(ConfigurationError) as exc_info:
            Project(project_home).load_settings()
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_schema_violation(self, project_home: Path) -> None:
        _write_info(project_home, {"schema_version": "2.0.0", "settings": {"build": {"type": "gradle"}}})
        with pytest.raises(ConfigurationError, match="Invalid project settings"):
            Project(project_home).load_settings()

    def test_save_and_reload(self, project_home: Path) -> None:
        project = Project(project_home)
        project.name = "saved"
        project.description = "round trip"
        project.settings.base_package = "com.saved"
        project.save_settings()

        info = json.loads((project_home / PROJECT_INFO_FILENAME).read_text())
        assert info["schema_version"] == "2.0.0"
        assert "projectHome" not in info

        reloaded = Project(project_home)
        reloaded.load_settings()
        assert reloaded.name == "saved"
        assert reloaded.settings == project.settings


# ---------------------------------------------------------------------------
# Class Loader Tests
# ---------------------------------------------------------------------------


def _compiled_class(home: Path, class_name: str, output: str = "test-classes") -> None:
    file = home / "target" / output / (class_name.replace(".", "/") + ".class")
    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_bytes(b"\xca\xfe\xba\xbe")


class TestProjectClassLoader:

    def test_non_maven_classpath(self, project_home: Path) -> None:
        project = Project(project_home)
        assert project.get_classpath() == [
            project.home / "target" / "classes",
            project.home / "target" / "test-classes",
        ]

    def test_class_loader_is_memoized(self, project_home: Path) -> None:
        project = Project(project_home)
        assert project.get_class_loader() is project.get_class_loader()

    def test_concurrent_first_calls_share_loader(self, project_home: Path) -> None:
        project = Project(project_home)
        loaders: List[object] = []
        barrier = threading.Barrier(8)

        def _load() -> None:
            barrier.wait()
            loaders.append(project.get_class_loader())

        threads = [threading.Thread(target=_load) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(loaders) == 8
        assert all(loader is loaders[0] for loader in loaders)

    def test_spring_java_config(self, project_home: Path) -> None:
        _compiled_class(project_home, "com.acme.config.EndpointConfig")
        project = Project(project_home)
        project.settings.spring_java_config = "com.acme.config.EndpointConfig"

        config = project.get_spring_java_config()

        assert config.name == "com.acme.config.EndpointConfig"
        assert config.location == project.home / "target" / "test-classes"
        assert project.get_spring_java_config() is config

    def test_spring_java_config_missing(self, project_home: Path) -> None:
        project = Project(project_home)
        project.settings.spring_java_config = "com.acme.Missing"

        with pytest.raises(ApplicationRuntimeError, match="Spring Java config") as exc_info:
            project.get_spring_java_config()
        assert exc_info.value.__cause__ is not None

    def test_maven_classpath(self, project_home: Path, local_repo: LocalRepository) -> None:
        core = local_repo.install("com.consol.citrus:citrus-core:2.7.2", [("org.slf4j:slf4j-api:1.7.25", "compile")])
        slf4j = local_repo.install("org.slf4j:slf4j-api:1.7.25")
        guava = local_repo.install("com.google.guava:guava:23.0", classes=["com.google.common.base.Strings"])
        junit = local_repo.install("junit:junit:4.12")
        (project_home / "pom.xml").write_text(pom_xml(
            MavenCoordinate("com.acme", "tests", "1.0"),
            [
                ("com.google.guava:guava:23.0", "compile"),
                ("junit:junit:4.12", "test"),
                ("com.consol.citrus:citrus-core:2.7.2", "test"),
                ("org.slf4j:slf4j-api:1.7.25", "compile"),
                ("javax.servlet:servlet-api:2.5", "provided"),
            ],
        ))
        project = Project(project_home, resolver=DependencyResolver(local_repo.root))

        classpath = project.get_classpath()

        assert classpath[:2] == [project.home / "target" / "classes", project.home / "target" / "test-classes"]
        assert core in classpath and slf4j in classpath
        assert guava in classpath and junit in classpath
        assert classpath.count(core) == 1
        assert classpath.count(slf4j) == 1
        assert project.get_class_loader().has_class("com.google.common.base.Strings")

    def test_unreadable_pom_is_fatal(self, project_home: Path, local_repo: LocalRepository) -> None:
        (project_home / "pom.xml").write_text("<project><unclosed>")
        project = Project(project_home, resolver=DependencyResolver(local_repo.root))

        with pytest.raises(ApplicationRuntimeError, match="Failed to read POM"):
            project.get_class_loader()


# ---------------------------------------------------------------------------
# ProjectService Tests
# ---------------------------------------------------------------------------


class TestProjectService:

    def test_no_active_project(self) -> None:
        service = ProjectService()
        assert not service.has_active_project()
        with pytest.raises(ApplicationRuntimeError, match="No active project"):
            service.get_active_project()

    def test_save_then_reopen(self, project_home: Path) -> None:
        service = ProjectService()
        project = service.open(project_home)
        project.description = "Greeting tests"
        project.settings.build = AntBuildConfiguration(build_file="run.xml")

        saved = service.save()
        reopened = ProjectService().open(project_home)

        assert saved == project_home.resolve() / PROJECT_INFO_FILENAME
        assert json.loads(saved.read_text())["schema_version"] == "2.0.0"
        assert reopened.description == "Greeting tests"
        assert reopened.settings.build == AntBuildConfiguration(build_file="run.xml")

    def test_open_invalid_info_file(self, project_home: Path) -> None:
        (project_home / PROJECT_INFO_FILENAME).write_text("{not json")
        with pytest.raises(ConfigurationError):
            ProjectService().open(project_home)
