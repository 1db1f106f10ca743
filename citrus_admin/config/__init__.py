"""
Configuration Management Module.

Handles:
- System property resolution with environment and default fallbacks.
- Project-info schema validation.
- Version-aware migration of older project-info documents.
"""

from citrus_admin.config.provider import ConfigurationProvider, SystemProperty, system_property
from citrus_admin.config.schema_registry import SchemaRegistry, SchemaValidationError
from citrus_admin.config.version_compat import ProjectInfoMigrator

__all__ = [
    "ConfigurationProvider",
    "ProjectInfoMigrator",
    "SchemaRegistry",
    "SchemaValidationError",
    "SystemProperty",
    "system_property",
]
