"""
Citrus Admin Console - Test Suite Package.

Pytest-based unit tests for configuration, project model, dependency
resolution, converters, services and HTTP controllers.
"""
