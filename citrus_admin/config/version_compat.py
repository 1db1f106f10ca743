"""
Project Info Version Compatibility.

Handles backward compatibility for project-info files written by older
console versions. Documents carry an explicit ``schema_version``; a
migration pipeline lifts older documents to the current version before
they are validated and applied to a project.

Version history:
- 1.0.0: Unversioned documents. The build configuration is tagged with a
  fully-qualified Java class name under ``@class``.
- 2.0.0: Build configuration tagged with an explicit ``type`` discriminator.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

from loguru import logger


# Type alias for migration functions:
# (project_info) -> project_info
MigrationFunc = Callable[[Dict[str, Any]], Dict[str, Any]]

LEGACY_VERSION = "1.0.0"

# Java class names persisted by 1.0.0 documents -> build type discriminator
LEGACY_BUILD_CLASSES = {
    "com.consol.citrus.admin.model.build.maven.MavenBuildConfiguration": "maven",
    "com.consol.citrus.admin.service.command.maven.MavenBuildContext": "maven",
    "com.consol.citrus.admin.model.build.ant.AntBuildConfiguration": "ant",
    "com.consol.citrus.admin.service.command.ant.AntBuildContext": "ant",
}


class ProjectInfoMigrator:
    """
    Applies version-aware migrations to project-info documents.

    Migrations are registered as functions that transform a document
    from one schema version to the next and are applied in order.

    Example:
        migrator = ProjectInfoMigrator()

        @migrator.register_migration("2.0.0", "2.1.0")
        def add_groups(info):
            info.setdefault("groups", [])
            return info
    """

    CURRENT_VERSION = "2.0.0"

    def __init__(self) -> None:
        self._migrations: List[Tuple[str, str, MigrationFunc]] = []
        self._register_builtin_migrations()

    def register_migration(
        self, from_version: str, to_version: str
    ) -> Callable[[MigrationFunc], MigrationFunc]:
        """
        Decorator to register a migration function.

        Args:
            from_version: Source schema version (semver string).
            to_version: Target schema version (semver string).

        Returns:
            Decorator function.
        """

        def decorator(func: MigrationFunc) -> MigrationFunc:
            self._migrations.append((from_version, to_version, func))
            self._migrations.sort(key=lambda m: self._version_tuple(m[0]))
            logger.debug(f"Registered project info migration: {from_version} -> {to_version}")
            return func

        return decorator

    def migrate(self, info: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply all necessary migrations to bring a document to the current version.

        Documents without ``schema_version`` are treated as the legacy 1.0.0 format.

        Args:
            info: Parsed project-info document.

        Returns:
            Migrated document with ``schema_version`` set to the current version.
        """
        version = info.get("schema_version") or LEGACY_VERSION

        if version == self.CURRENT_VERSION:
            info["schema_version"] = version
            return info

        path = self.get_migration_path(version)
        steps = " -> ".join([path[0][0]] + [to_ver for _, to_ver in path]) if path else "none"
        logger.info(f"Migrating project info from v{version} to v{self.CURRENT_VERSION} (steps: {steps})")

        for from_ver, to_ver, migration_func in self._migrations:
            if (from_ver, to_ver) in path:
                logger.debug(f"Applying migration: {from_ver} -> {to_ver}")
                try:
                    info = migration_func(info)
                    info["schema_version"] = to_ver
                except Exception as e:
                    logger.error(f"Migration {from_ver} -> {to_ver} failed: {e}")
                    raise

        return info

    def get_migration_path(self, from_version: str) -> List[Tuple[str, str]]:
        """Get the ordered list of migrations needed from a given version."""
        return [
            (from_ver, to_ver)
            for from_ver, to_ver, _ in self._migrations
            if self._version_tuple(from_ver) >= self._version_tuple(from_version)
            and self._version_tuple(to_ver) <= self._version_tuple(self.CURRENT_VERSION)
        ]

    def _register_builtin_migrations(self) -> None:

        @self.register_migration("1.0.0", "2.0.0")
        def _migrate_1_0_to_2_0(info: Dict[str, Any]) -> Dict[str, Any]:
            """Replace Java class tags on the build configuration with a type discriminator."""
            build = (info.get("settings") or {}).get("build")
            if not isinstance(build, dict):
                return info

            class_name = build.pop("@class", None)
            if class_name is not None and "type" not in build:
                build_type = LEGACY_BUILD_CLASSES.get(class_name)
                if build_type is None:
                    raise ValueError(f"Unsupported build configuration class: {class_name}")
                build["type"] = build_type
                logger.debug(f"Migrated build class {class_name} -> type '{build_type}'")

            build.setdefault("type", "maven")
            return info

    @staticmethod
    def _version_tuple(version_str: str) -> Tuple[int, ...]:
        """Convert a semver string to a comparable tuple of ints."""
        try:
            return tuple(int(part) for part in version_str.split("."))
        except (ValueError, AttributeError):
            logger.warning(f"Invalid version string: {version_str}, treating as (0, 0, 0)")
            return (0, 0, 0)
