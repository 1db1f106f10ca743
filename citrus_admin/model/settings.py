"""
Project settings and build configuration.

Settings defaults are resolved through the ConfigurationProvider when a
ProjectSettings instance is created via ``ProjectSettings.load()``; the
persisted (camelCase) project-info form is produced and consumed by
``to_dict``/``from_dict``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Type

from citrus_admin.config.provider import (
    BASE_PACKAGE,
    BUILD_TOOL,
    FRAMEWORK_VERSION,
    JAVA_SRC_DIRECTORY,
    XML_SRC_DIRECTORY,
    ConfigurationProvider,
    system_property,
)

DEFAULT_FRAMEWORK_VERSION = "2.7.2"
DEFAULT_JAVA_FILE_PATTERN = "**/*Test.java,**/*IT.java"
DEFAULT_XML_FILE_PATTERN = "**/*Test.xml,**/*IT.xml"


@dataclass
class BuildProperty:
    """A ``-Dname=value`` property passed to the build tool."""

    name: str
    value: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass
class BuildConfiguration:
    """Base class for build tool configurations."""

    TYPE: ClassVar[str] = ""

    properties: List[BuildProperty] = field(default_factory=list)

    @property
    def type(self) -> str:
        return self.TYPE

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted project-info form."""
        return {
            "type": self.type,
            "properties": [p.to_dict() for p in self.properties],
            **self._extra_fields(),
        }

    def _extra_fields(self) -> Dict[str, Any]:
        return {}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "BuildConfiguration":
        """
        Create the build configuration variant named by the ``type`` discriminator.

        Raises:
            ValueError: If the type is not a known build tool.
        """
        build_type = data.get("type", MavenBuildConfiguration.TYPE)
        variant = BUILD_CONFIGURATIONS.get(build_type)
        if variant is None:
            raise ValueError(
                f"Unknown build type '{build_type}'. "
                f"Supported: {list(BUILD_CONFIGURATIONS.keys())}"
            )

        properties = [
            BuildProperty(name=p["name"], value=str(p.get("value") or ""))
            for p in data.get("properties") or []
        ]
        return variant._from_fields(data, properties)

    @classmethod
    def _from_fields(
        cls, data: Dict[str, Any], properties: List[BuildProperty]
    ) -> "BuildConfiguration":
        return cls(properties=properties)


@dataclass
class MavenBuildConfiguration(BuildConfiguration):
    """Maven build settings."""

    TYPE: ClassVar[str] = "maven"

    test_plugin: str = "maven-failsafe"
    clean: bool = False
    compile: bool = True
    use_class_file: bool = False
    profiles: str = ""
    command: str = ""

    def _extra_fields(self) -> Dict[str, Any]:
        return {
            "testPlugin": self.test_plugin,
            "clean": self.clean,
            "compile": self.compile,
            "useClassFile": self.use_class_file,
            "profiles": self.profiles,
            "command": self.command,
        }

    @classmethod
    def _from_fields(
        cls, data: Dict[str, Any], properties: List[BuildProperty]
    ) -> "MavenBuildConfiguration":
        return cls(
            properties=properties,
            test_plugin=data.get("testPlugin", "maven-failsafe"),
            clean=_flag(data, "clean", False),
            compile=_flag(data, "compile", True),
            use_class_file=_flag(data, "useClassFile", False),
            profiles=data.get("profiles") or "",
            command=data.get("command") or "",
        )


@dataclass
class AntBuildConfiguration(BuildConfiguration):
    """Ant build settings."""

    TYPE: ClassVar[str] = "ant"

    build_file: str = "build.xml"
    execute_target: str = "citrus.run.tests"

    def _extra_fields(self) -> Dict[str, Any]:
        return {"buildFile": self.build_file, "executeTarget": self.execute_target}

    @classmethod
    def _from_fields(
        cls, data: Dict[str, Any], properties: List[BuildProperty]
    ) -> "AntBuildConfiguration":
        return cls(
            properties=properties,
            build_file=data.get("buildFile", "build.xml"),
            execute_target=data.get("executeTarget", "citrus.run.tests"),
        )


def _flag(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Build option '{key}' must be a boolean, got {value!r}")
    return value


BUILD_CONFIGURATIONS: Dict[str, Type[BuildConfiguration]] = {
    MavenBuildConfiguration.TYPE: MavenBuildConfiguration,
    AntBuildConfiguration.TYPE: AntBuildConfiguration,
}


def _default_build() -> BuildConfiguration:
    build_tool = ConfigurationProvider.get_property(BUILD_TOOL, MavenBuildConfiguration.TYPE)
    return BUILD_CONFIGURATIONS.get(build_tool or "", MavenBuildConfiguration)()


@dataclass
class ProjectSettings:
    """
    Per-project settings.

    Attributes:
        base_package: Root Java package of the project's tests.
        framework_version: Citrus version the project builds against.
        java_src_directory: Java test sources, relative to project home.
        xml_src_directory: XML test sources, relative to project home.
        java_file_pattern: Comma separated Java test file name patterns.
        xml_file_pattern: Comma separated XML test file name patterns.
        spring_java_config: Fully qualified name of the Spring Java config class.
        build: Build tool configuration.
    """

    base_package: str = system_property(BASE_PACKAGE, "com.consol.citrus")
    framework_version: str = system_property(FRAMEWORK_VERSION, DEFAULT_FRAMEWORK_VERSION)
    java_src_directory: str = system_property(
        JAVA_SRC_DIRECTORY, "src" + os.sep + "test" + os.sep + "java" + os.sep
    )
    xml_src_directory: str = system_property(
        XML_SRC_DIRECTORY, "src" + os.sep + "test" + os.sep + "resources" + os.sep
    )
    java_file_pattern: str = DEFAULT_JAVA_FILE_PATTERN
    xml_file_pattern: str = DEFAULT_XML_FILE_PATTERN
    spring_java_config: str = "com.consol.citrus.config.CitrusSpringConfig"
    build: BuildConfiguration = field(default_factory=_default_build)

    @classmethod
    def load(cls, properties: Optional[Dict[str, str]] = None) -> "ProjectSettings":
        """Create settings with defaults resolved from system properties."""
        return ConfigurationProvider.load(cls, properties)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "basePackage": self.base_package,
            "citrusVersion": self.framework_version,
            "javaSrcDirectory": self.java_src_directory,
            "xmlSrcDirectory": self.xml_src_directory,
            "javaFilePattern": self.java_file_pattern,
            "xmlFilePattern": self.xml_file_pattern,
            "springJavaConfig": self.spring_java_config,
            "build": self.build.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectSettings":
        """Create settings from the persisted form; absent keys keep their defaults."""
        settings = cls.load()
        mapping = {
            "basePackage": "base_package",
            "citrusVersion": "framework_version",
            "javaSrcDirectory": "java_src_directory",
            "xmlSrcDirectory": "xml_src_directory",
            "javaFilePattern": "java_file_pattern",
            "xmlFilePattern": "xml_file_pattern",
            "springJavaConfig": "spring_java_config",
        }
        for key, attr in mapping.items():
            if data.get(key) is not None:
                setattr(settings, attr, data[key])

        if data.get("build") is not None:
            settings.build = BuildConfiguration.from_dict(data["build"])

        return settings
