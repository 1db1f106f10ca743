"""
HTTP controllers.

- /tests: test package listing, test details and test source code.
- /project: the active project and its build.
- /reports: latest test run report.

Handlers only parse request parameters and delegate to the services.
"""

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from citrus_admin.model.testcase import TestType
from citrus_admin.web.app import get_services

tests_bp = Blueprint("tests", __name__, url_prefix="/tests")
project_bp = Blueprint("project", __name__, url_prefix="/project")
reports_bp = Blueprint("reports", __name__, url_prefix="/reports")


@tests_bp.route("", methods=["GET"], strict_slashes=False)
def list_tests():
    services = get_services()
    project = services.project_service.get_active_project()
    packages = services.test_case_service.get_test_packages(project)
    return jsonify([p.to_dict() for p in packages])


@tests_bp.route("/detail/<test_type>/<package>/<name>", methods=["GET"])
def get_test_detail(test_type: str, package: str, name: str):
    parsed_type = TestType.parse(test_type)
    services = get_services()
    project = services.project_service.get_active_project()
    detail = services.test_case_service.get_test_detail(project, package, name, parsed_type)
    return jsonify(detail.to_dict())


@tests_bp.route("/source/<test_type>/<package>/<name>", methods=["GET"])
def get_source_code(test_type: str, package: str, name: str):
    parsed_type = TestType.parse(test_type)
    services = get_services()
    project = services.project_service.get_active_project()
    source = services.test_case_service.get_source_code(project, package, name, parsed_type)
    return Response(source, mimetype="text/plain")


@project_bp.route("", methods=["GET"], strict_slashes=False)
def get_project():
    project = get_services().project_service.get_active_project()
    return jsonify(project.to_dict())


@project_bp.route("/build", methods=["POST"])
def run_build():
    test = request.args.get("test")
    result = get_services().project_service.build(test)
    return jsonify(result.to_dict()), 200 if result.is_success else 500


@reports_bp.route("/latest", methods=["GET"])
def latest_report():
    services = get_services()
    project = services.project_service.get_active_project()
    report = services.report_service.get_latest(project)
    if report is None:
        return jsonify({"error": "not_found", "message": "No test reports available"}), 404
    return jsonify(report.to_dict())
