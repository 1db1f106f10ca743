"""
Build Integration Module.

Provides:
- Offline Maven dependency resolution against the local repository.
- The project class loader over build output and resolved artifacts.
- Maven/Ant build command execution.
"""

from citrus_admin.build.classloader import LoadedClass, ProjectClassLoader
from citrus_admin.build.commands import BuildCommand, BuildResult
from citrus_admin.build.maven import DependencyResolver, MavenCoordinate, PomReader

__all__ = [
    "BuildCommand",
    "BuildResult",
    "DependencyResolver",
    "LoadedClass",
    "MavenCoordinate",
    "PomReader",
    "ProjectClassLoader",
]
