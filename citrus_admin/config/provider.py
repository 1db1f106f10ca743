"""
Configuration Provider Module.

Resolves process-wide settings declared on dataclass fields:
- Explicit property overrides (``-Dname=value`` style system properties).
- Environment variables.
- Hard-coded defaults.

Property overrides may also be loaded from a YAML or JSON properties file.
"""

from __future__ import annotations

import dataclasses
import json
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import yaml
from loguru import logger

from citrus_admin.exceptions import ConfigurationError

T = TypeVar("T")

# Dataclass field metadata key holding the SystemProperty declaration
SYSTEM_PROPERTY = "system_property"

BASE_PACKAGE = "citrus.admin.base.package"
JAVA_SRC_DIRECTORY = "citrus.admin.java.src.directory"
XML_SRC_DIRECTORY = "citrus.admin.xml.src.directory"
PROJECT_HOME = "citrus.admin.project.home"
FRAMEWORK_VERSION = "citrus.admin.framework.version"
BUILD_TOOL = "citrus.admin.build.tool"
LOCAL_REPOSITORY = "maven.repo.local"
SERVER_PORT = "citrus.admin.server.port"


@dataclass(frozen=True)
class SystemProperty:
    """
    Declares how a single setting is resolved.

    Attributes:
        name: System property name (e.g. ``citrus.admin.base.package``).
        environment: Environment variable name. Derived from ``name`` when empty.
        default: Fallback value used when neither source is set.
    """

    name: str
    environment: str = ""
    default: Optional[str] = None

    @property
    def environment_name(self) -> str:
        """Environment variable consulted for this property."""
        if self.environment:
            return self.environment
        return self.name.upper().replace(".", "_")


def system_property(
    name: str,
    default: Optional[str] = None,
    environment: str = "",
) -> Any:
    """Declare a dataclass field resolved through the ConfigurationProvider."""
    declaration = SystemProperty(name=name, environment=environment, default=default)
    return dataclasses.field(
        default=default,
        metadata={SYSTEM_PROPERTY: declaration},
    )


class ConfigurationProvider:
    """
    Process-wide property source with layered lookup.

    Lookup order for every property: explicit overrides, then the
    environment, then the declared default.

    Usage::

        ConfigurationProvider.set_property("citrus.admin.base.package", "com.acme")
        settings = ConfigurationProvider.load(ProjectSettings)
    """

    SUPPORTED_EXTENSIONS = {".yaml", ".yml", ".json", ".properties"}

    _properties: Dict[str, str] = {}
    _lock = threading.Lock()

    @classmethod
    def set_property(cls, name: str, value: Any) -> None:
        """Set a process-wide property override."""
        with cls._lock:
            cls._properties[name] = str(value)
        logger.debug(f"System property set: {name}={value}")

    @classmethod
    def set_properties(cls, properties: Mapping[str, Any]) -> None:
        """Set several property overrides at once."""
        with cls._lock:
            cls._properties.update({k: str(v) for k, v in properties.items()})

    @classmethod
    def clear_properties(cls) -> None:
        """Remove all property overrides."""
        with cls._lock:
            cls._properties.clear()

    @classmethod
    def get_property(
        cls,
        name: str,
        default: Optional[str] = None,
        environment: str = "",
        properties: Optional[Mapping[str, str]] = None,
    ) -> Optional[str]:
        """
        Resolve a single property value.

        Args:
            name: System property name.
            default: Value returned when the property is not set anywhere.
            environment: Environment variable name (derived from name if empty).
            properties: Overrides consulted instead of the process-wide ones.

        Returns:
            Resolved value or default.
        """
        return cls._resolve(SystemProperty(name, environment, default), properties)

    @classmethod
    def load(cls, target: Type[T], properties: Optional[Mapping[str, str]] = None) -> T:
        """
        Instantiate a dataclass resolving every SystemProperty field.

        Args:
            target: Dataclass type whose fields may declare SystemProperty metadata.
            properties: Optional overrides used instead of the process-wide ones.

        Returns:
            New instance of target.
        """
        if not dataclasses.is_dataclass(target):
            raise TypeError(f"{target.__name__} is not a dataclass")

        values: Dict[str, Any] = {}
        for f in dataclasses.fields(target):
            declaration = f.metadata.get(SYSTEM_PROPERTY)
            if declaration is None or not f.init:
                continue
            values[f.name] = cls._resolve(declaration, properties)

        return target(**values)

    @classmethod
    def load_properties_file(cls, path: str | Path) -> Dict[str, str]:
        """
        Read property overrides from a YAML, JSON or ``.properties`` file.

        Args:
            path: Properties file location.

        Returns:
            Flat mapping of property names to string values.

        Raises:
            ConfigurationError: If the file is unsupported, unreadable or malformed.
        """
        file_path = Path(path)
        suffix = file_path.suffix.lower()
        if suffix not in cls.SUPPORTED_EXTENSIONS:
            raise ConfigurationError(
                f"Unsupported file format '{suffix}'. "
                f"Supported: {cls.SUPPORTED_EXTENSIONS}"
            )

        try:
            content = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to read file {file_path}: {e}") from e

        if suffix == ".properties":
            data = cls._parse_properties(content)
        else:
            try:
                if suffix in {".yaml", ".yml"}:
                    data = yaml.safe_load(content)
                else:
                    data = json.loads(content)
            except (yaml.YAMLError, json.JSONDecodeError) as e:
                raise ConfigurationError(f"Failed to parse {file_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Properties file must contain a mapping (dict), "
                f"got {type(data).__name__}: {file_path}"
            )

        logger.info(f"Loaded {len(data)} properties from {file_path}")
        return {str(k): str(v) for k, v in data.items()}

    @classmethod
    def _resolve(
        cls, declaration: SystemProperty, properties: Optional[Mapping[str, str]]
    ) -> Optional[str]:
        source = cls._properties if properties is None else properties
        if declaration.name in source:
            return source[declaration.name]

        env_value = os.environ.get(declaration.environment_name)
        if env_value is not None:
            return env_value

        return declaration.default

    @staticmethod
    def _parse_properties(content: str) -> Dict[str, str]:
        """Parse ``key=value`` lines, skipping blanks and comments."""
        data: Dict[str, str] = {}
        for line in content.splitlines():
            line = line.strip()
            if not line or line.startswith(("#", "!")):
                continue
            key, sep, value = line.partition("=")
            if not sep:
                key, sep, value = line.partition(":")
            data[key.strip()] = value.strip()
        return data
