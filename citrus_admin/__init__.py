"""
Citrus Admin Console - Core Source Package.

This package contains the core logic for:
- Configuration: System property resolution and project-info persistence.
- Model: Project facade, settings, test artifacts and reports.
- Build: Offline Maven dependency resolution, project class loading, build commands.
- Converters: Translation between framework actions/endpoints and their models.
- Web: HTTP controllers for browsing and inspecting test cases.
"""

__version__ = "0.1.0"
