"""
Flask application factory.

Services are passed in explicitly and stored on the application; the
controllers read them from there for every request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from flask import Flask, Response, current_app, jsonify
from loguru import logger

from citrus_admin.exceptions import ApplicationRuntimeError, InvalidTestTypeError, TestNotFoundError
from citrus_admin.services.project_service import ProjectService
from citrus_admin.services.report_service import ReportService
from citrus_admin.services.test_case_service import TestCaseService

EXTENSION_KEY = "citrus_admin"


@dataclass
class Services:
    """Collaborators available to the controllers."""

    project_service: ProjectService
    test_case_service: TestCaseService
    report_service: ReportService


def get_services() -> Services:
    """Services of the application handling the current request."""
    return current_app.extensions[EXTENSION_KEY]


def create_app(
    project_service: ProjectService,
    test_case_service: Optional[TestCaseService] = None,
    report_service: Optional[ReportService] = None,
) -> Flask:
    """
    Create the console web application.

    Args:
        project_service: Holds the active project.
        test_case_service: Test discovery service (default implementation if None).
        report_service: Report service (default implementation if None).
    """
    from citrus_admin.web.controllers import project_bp, reports_bp, tests_bp

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = Services(
        project_service=project_service,
        test_case_service=test_case_service or TestCaseService(),
        report_service=report_service or ReportService(),
    )

    app.register_blueprint(tests_bp)
    app.register_blueprint(project_bp)
    app.register_blueprint(reports_bp)
    _register_error_handlers(app)

    logger.info("Citrus admin web application created")
    return app


def _error(status: int, error: str, message: str) -> Tuple[Response, int]:
    return jsonify({"error": error, "message": message}), status


def _register_error_handlers(app: Flask) -> None:

    @app.errorhandler(InvalidTestTypeError)
    def _invalid_test_type(e: InvalidTestTypeError):
        logger.warning(f"Rejected request: {e}")
        return _error(400, "invalid_argument", str(e))

    @app.errorhandler(TestNotFoundError)
    def _test_not_found(e: TestNotFoundError):
        return _error(404, "not_found", str(e))

    @app.errorhandler(ApplicationRuntimeError)
    def _application_error(e: ApplicationRuntimeError):
        cause = f" (caused by: {e.__cause__})" if e.__cause__ else ""
        logger.error(f"Request failed: {e}{cause}")
        return _error(500, "application_error", f"{e}{cause}")
