"""
Project class loader.

Locates compiled Java classes on a project classpath made of output
directories and jar archives. Classes are not executed; a successful
lookup yields the classpath entry that provides the class.
"""

from __future__ import annotations

import threading
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from loguru import logger

from citrus_admin.exceptions import ClassNotFoundError


@dataclass(frozen=True)
class LoadedClass:
    """A class located on the project classpath."""

    name: str
    location: Path

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def package(self) -> str:
        return self.name.rpartition(".")[0]


class ProjectClassLoader:
    """
    Resolves fully qualified class names against classpath entries.

    Entries are searched in order; the first entry containing the class
    wins. Jar directories are indexed on first use.
    """

    def __init__(self, entries: Iterable[str | Path]) -> None:
        self.entries: List[Path] = [Path(e) for e in entries]
        self._jar_index: Dict[Path, Set[str]] = {}
        self._cache: Dict[str, LoadedClass] = {}
        self._lock = threading.Lock()

    def load_class(self, name: str) -> LoadedClass:
        """
        Locate a class by its fully qualified name.

        Raises:
            ClassNotFoundError: If no classpath entry provides the class.
        """
        if not name:
            raise ClassNotFoundError(str(name))

        with self._lock:
            if name in self._cache:
                return self._cache[name]

        resource = name.replace(".", "/") + ".class"
        location = self._find(resource)
        if location is None:
            raise ClassNotFoundError(name)

        loaded = LoadedClass(name=name, location=location)
        with self._lock:
            self._cache[name] = loaded
        logger.debug(f"Loaded class {name} from {location}")
        return loaded

    def has_class(self, name: str) -> bool:
        try:
            self.load_class(name)
        except ClassNotFoundError:
            return False
        return True

    def _find(self, resource: str) -> Optional[Path]:
        for entry in self.entries:
            if entry.is_dir():
                if (entry / resource).is_file():
                    return entry
            elif entry.suffix in (".jar", ".zip") and entry.is_file():
                if resource in self._jar_entries(entry):
                    return entry
        return None

    def _jar_entries(self, jar: Path) -> Set[str]:
        with self._lock:
            if jar in self._jar_index:
                return self._jar_index[jar]

        try:
            with zipfile.ZipFile(jar) as archive:
                names = set(archive.namelist())
        except (OSError, zipfile.BadZipFile) as e:
            logger.warning(f"Failed to read classpath archive {jar}: {e}")
            names = set()

        with self._lock:
            self._jar_index[jar] = names
        return names

    def __repr__(self) -> str:
        return f"ProjectClassLoader(entries={len(self.entries)})"
