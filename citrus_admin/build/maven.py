"""
Offline Maven Dependency Resolution.

Resolves artifacts against a local Maven repository only; no network
access is performed. Provides:
- MavenCoordinate: ``group:artifact:version`` parsing and repository layout.
- PomReader: POM parsing with property interpolation and managed versions.
- DependencyResolver: parallel, transitive resolution of artifact jars.

Individual artifacts that cannot be found are logged and skipped. A POM
that cannot be read at all aborts the resolution.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set

from loguru import logger

from citrus_admin.config.provider import LOCAL_REPOSITORY, ConfigurationProvider
from citrus_admin.exceptions import DependencyResolutionError

POM_NAMESPACE = "{http://maven.apache.org/POM/4.0.0}"

RUNTIME_SCOPES = ("compile", "runtime")
RUNTIME_AND_TEST_SCOPES = ("compile", "runtime", "test")

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def default_local_repository() -> Path:
    """Local repository location, overridable by the ``maven.repo.local`` property."""
    configured = ConfigurationProvider.get_property(LOCAL_REPOSITORY)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".m2" / "repository"


@dataclass(frozen=True)
class MavenCoordinate:
    """Artifact coordinates in Maven canonical form."""

    group_id: str
    artifact_id: str
    version: str
    packaging: str = "jar"

    @classmethod
    def parse(cls, coordinate: str) -> "MavenCoordinate":
        """
        Parse ``group:artifact:version`` or ``group:artifact:packaging:version``.

        Raises:
            ValueError: If the string is not a valid coordinate.
        """
        parts = coordinate.strip().split(":")
        if len(parts) == 3:
            return cls(parts[0], parts[1], parts[2])
        if len(parts) == 4:
            return cls(parts[0], parts[1], parts[3], packaging=parts[2])
        raise ValueError(f"Invalid Maven coordinate: '{coordinate}'")

    @property
    def key(self) -> str:
        """Version-less identity used to detect duplicates."""
        return f"{self.group_id}:{self.artifact_id}"

    def path_in(self, repository: Path, extension: Optional[str] = None) -> Path:
        """Location of this artifact's file inside a local repository."""
        ext = extension or self.packaging
        return (
            repository.joinpath(*self.group_id.split("."))
            / self.artifact_id
            / self.version
            / f"{self.artifact_id}-{self.version}.{ext}"
        )

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


@dataclass
class Dependency:
    """A dependency declared in a POM."""

    coordinate: MavenCoordinate
    scope: str = "compile"
    optional: bool = False
    exclusions: Set[str] = field(default_factory=set)


class PomReader:
    """
    Reads a POM file.

    Property placeholders are interpolated from ``<properties>``,
    ``project.version``, ``project.groupId`` and the parent's coordinates.
    Placeholders that cannot be resolved are left in place.

    Versions missing on a declared dependency are taken from
    ``<dependencyManagement>``, including imported BOMs and everything
    inherited from the parent POM. The parent is looked up through
    ``<relativePath>`` first, then in the local repository.
    """

    def __init__(
        self,
        pom_file: Path,
        repository: Optional[Path] = None,
        _seen: FrozenSet[Path] = frozenset(),
    ) -> None:
        self.pom_file = Path(pom_file)
        self.repository = Path(repository) if repository else None
        try:
            self._root = ET.parse(self.pom_file).getroot()
        except (OSError, ET.ParseError) as e:
            raise DependencyResolutionError(f"Failed to read POM {self.pom_file}: {e}") from e

        self._ns = POM_NAMESPACE if self._root.tag.startswith(POM_NAMESPACE) else ""
        self._seen = _seen | {self.pom_file.resolve()}
        self.parent = self._read_parent()
        self.properties = self._read_properties()
        self.managed_dependencies = self._read_managed_dependencies()

    @property
    def group_id(self) -> str:
        return self._text("groupId") or self._text("parent/groupId") or ""

    @property
    def artifact_id(self) -> str:
        return self._text("artifactId") or ""

    @property
    def version(self) -> str:
        return self._text("version") or self._text("parent/version") or ""

    def dependencies(self, scopes: Sequence[str] = RUNTIME_AND_TEST_SCOPES) -> List[Dependency]:
        """
        List declared and inherited dependencies within the given scopes.

        Dependencies whose version cannot be determined are logged and skipped.
        """
        declared: Dict[str, Dependency] = {}
        if self.parent is not None:
            for dependency in self.parent.dependencies(scopes):
                declared[dependency.coordinate.key] = dependency

        for node in self._root.findall(f"{self._ns}dependencies/{self._ns}dependency"):
            group_id = self._interpolate(self._child_text(node, "groupId"))
            artifact_id = self._interpolate(self._child_text(node, "artifactId"))
            version = self._interpolate(self._child_text(node, "version"))
            packaging = self._child_text(node, "type") or "jar"

            key = f"{group_id}:{artifact_id}"
            managed = self.managed_dependencies.get(key)
            if not version and managed is not None:
                version = managed.coordinate.version
            scope = self._child_text(node, "scope") or (managed.scope if managed else "") or "compile"

            if scope not in scopes:
                continue
            if not version or "${" in version:
                logger.warning(
                    f"Skipping dependency {key} of {self.pom_file.name} - "
                    f"unresolved version '{version}'"
                )
                continue

            exclusions = {
                f"{self._child_text(ex, 'groupId')}:{self._child_text(ex, 'artifactId')}"
                for ex in node.findall(f"{self._ns}exclusions/{self._ns}exclusion")
            }
            declared.pop(key, None)
            declared[key] = Dependency(
                coordinate=MavenCoordinate(group_id, artifact_id, version, packaging),
                scope=scope,
                optional=self._child_text(node, "optional") == "true",
                exclusions=exclusions,
            )
        return list(declared.values())

    def _read_parent(self) -> Optional["PomReader"]:
        parent = self._root.find(f"{self._ns}parent")
        if parent is None:
            return None

        group_id = self._child_text(parent, "groupId")
        artifact_id = self._child_text(parent, "artifactId")
        version = self._child_text(parent, "version")

        candidates: List[Path] = []
        relative = parent.find(f"{self._ns}relativePath")
        if relative is None:
            candidates.append(self.pom_file.parent / ".." / "pom.xml")
        elif relative.text and relative.text.strip():
            local = self.pom_file.parent / relative.text.strip()
            candidates.append(local / "pom.xml" if local.is_dir() else local)
        if self.repository is not None and version:
            coordinate = MavenCoordinate(group_id, artifact_id, version, "pom")
            candidates.append(coordinate.path_in(self.repository, "pom"))

        for candidate in candidates:
            if not candidate.is_file() or candidate.resolve() in self._seen:
                continue
            try:
                reader = PomReader(candidate, self.repository, self._seen)
            except DependencyResolutionError as e:
                logger.warning(f"Ignoring unreadable parent POM of {self.pom_file.name}: {e}")
                continue
            if reader.artifact_id == artifact_id:
                return reader

        logger.warning(
            f"Parent POM {group_id}:{artifact_id}:{version} of {self.pom_file.name} "
            f"not found - inherited versions are unavailable"
        )
        return None

    def _read_properties(self) -> Dict[str, str]:
        properties: Dict[str, str] = dict(self.parent.properties) if self.parent else {}
        props = self._root.find(f"{self._ns}properties")
        if props is not None:
            for prop in props:
                name = prop.tag[len(self._ns):] if self._ns else prop.tag
                properties[name] = (prop.text or "").strip()

        properties["project.groupId"] = self.group_id
        properties["project.version"] = self.version
        properties["project.parent.groupId"] = self._text("parent/groupId") or ""
        properties["project.parent.version"] = self._text("parent/version") or ""
        return properties

    def _read_managed_dependencies(self) -> Dict[str, Dependency]:
        managed: Dict[str, Dependency] = dict(self.parent.managed_dependencies) if self.parent else {}
        nodes = self._root.findall(
            f"{self._ns}dependencyManagement/{self._ns}dependencies/{self._ns}dependency"
        )

        # Imported BOMs first, entries declared here override them
        own: Dict[str, Dependency] = {}
        for node in nodes:
            group_id = self._interpolate(self._child_text(node, "groupId"))
            artifact_id = self._interpolate(self._child_text(node, "artifactId"))
            version = self._interpolate(self._child_text(node, "version"))
            scope = self._child_text(node, "scope")

            if not version or "${" in version:
                logger.warning(
                    f"Ignoring managed dependency {group_id}:{artifact_id} of "
                    f"{self.pom_file.name} - unresolved version '{version}'"
                )
                continue

            coordinate = MavenCoordinate(group_id, artifact_id, version)
            if scope == "import":
                managed.update(self._read_bom(coordinate))
            else:
                own[coordinate.key] = Dependency(coordinate=coordinate, scope=scope)

        managed.update(own)
        return managed

    def _read_bom(self, coordinate: MavenCoordinate) -> Dict[str, Dependency]:
        if self.repository is None:
            logger.warning(f"Cannot import BOM {coordinate} without a local repository")
            return {}
        bom_file = coordinate.path_in(self.repository, "pom")
        if not bom_file.is_file() or bom_file.resolve() in self._seen:
            logger.warning(f"Failed to import BOM {coordinate}: {bom_file} not found")
            return {}
        try:
            return PomReader(bom_file, self.repository, self._seen).managed_dependencies
        except DependencyResolutionError as e:
            logger.warning(f"Failed to import BOM {coordinate}: {e}")
            return {}

    def _interpolate(self, value: str) -> str:
        for _ in range(10):
            replaced = _PLACEHOLDER.sub(
                lambda m: self.properties.get(m.group(1), m.group(0)), value
            )
            if replaced == value:
                break
            value = replaced
        return value

    def _text(self, path: str) -> Optional[str]:
        ns_path = "/".join(f"{self._ns}{part}" for part in path.split("/"))
        node = self._root.find(ns_path)
        if node is None or node.text is None:
            return None
        return node.text.strip()

    def _child_text(self, node: ET.Element, name: str) -> str:
        child = node.find(f"{self._ns}{name}")
        if child is None or child.text is None:
            return ""
        return child.text.strip()


class DependencyResolver:
    """
    Resolves artifacts and their transitive dependencies from a local repository.

    Each root coordinate is resolved in its own worker; results are
    collected and merged afterwards, keeping the first occurrence of
    every artifact file.

    Usage::

        resolver = DependencyResolver()
        jars = resolver.resolve(["com.consol.citrus:citrus-core:2.7.2"])
    """

    def __init__(
        self,
        local_repository: Optional[str | Path] = None,
        max_workers: int = 8,
    ) -> None:
        self.local_repository = (
            Path(local_repository) if local_repository else default_local_repository()
        )
        self.max_workers = max_workers
        logger.debug(f"DependencyResolver initialized - repository={self.local_repository}")

    def resolve(self, coordinates: Iterable[str | MavenCoordinate]) -> List[Path]:
        """
        Resolve artifact coordinates transitively.

        Args:
            coordinates: Root artifacts as strings or MavenCoordinate objects.

        Returns:
            Artifact files found in the local repository.
        """
        roots = [
            c if isinstance(c, MavenCoordinate) else MavenCoordinate.parse(c)
            for c in coordinates
        ]
        return self._resolve_all([Dependency(coordinate=c) for c in roots])

    def resolve_pom(
        self,
        pom_file: str | Path,
        scopes: Sequence[str] = RUNTIME_AND_TEST_SCOPES,
    ) -> List[Path]:
        """
        Resolve the dependencies declared in a project POM.

        Raises:
            DependencyResolutionError: If the POM cannot be read.
        """
        reader = PomReader(Path(pom_file), self.local_repository)
        dependencies = reader.dependencies(scopes)
        logger.info(
            f"Resolving {len(dependencies)} declared dependencies of "
            f"{reader.group_id}:{reader.artifact_id}"
        )
        return self._resolve_all(dependencies)

    def _resolve_all(self, dependencies: List[Dependency]) -> List[Path]:
        if not dependencies:
            return []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            per_root = list(executor.map(self._resolve_tree, dependencies))

        merged: List[Path] = []
        seen: Set[Path] = set()
        for paths in per_root:
            for path in paths:
                if path not in seen:
                    seen.add(path)
                    merged.append(path)
        return merged

    def _resolve_tree(self, root: Dependency) -> List[Path]:
        """Resolve one root dependency and its transitive runtime closure."""
        resolved: List[Path] = []
        visited: Set[str] = set()
        pending = [(root, frozenset(root.exclusions))]

        while pending:
            dependency, exclusions = pending.pop(0)
            coordinate = dependency.coordinate
            if coordinate.key in visited:
                continue
            visited.add(coordinate.key)

            artifact = coordinate.path_in(self.local_repository)
            if coordinate.packaging != "pom":
                if artifact.is_file():
                    resolved.append(artifact)
                else:
                    logger.warning(f"Failed to resolve dependency {coordinate}: {artifact} not found")
                    continue

            for child in self._transitive(coordinate):
                if child.optional or child.coordinate.key in exclusions:
                    continue
                pending.append((child, exclusions | child.exclusions))

        return resolved

    def _transitive(self, coordinate: MavenCoordinate) -> List[Dependency]:
        pom_file = coordinate.path_in(self.local_repository, "pom")
        if not pom_file.is_file():
            return []
        try:
            return PomReader(pom_file, self.local_repository).dependencies(RUNTIME_SCOPES)
        except DependencyResolutionError as e:
            logger.warning(f"Ignoring unreadable POM for {coordinate}: {e}")
            return []
