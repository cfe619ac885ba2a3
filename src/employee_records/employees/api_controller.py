from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..common.datetime_utils import epoch_millis
from ..common.validators import parse_employee_input, parse_page_request
from ..core.exceptions import DataAccessError, DuplicateEmailError, EmployeeNotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

API_PREFIX = "/api/employees"


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    def _error(message: str, status: int, **extra):
        body = {"success": False, "message": message}
        body.update(extra)
        return jsonify(body), status

    def _validation_error(e: ValidationError):
        return _error("Validation failed", 400, errors=e.as_dict())

    def _server_error(action: str, e: Exception):
        if isinstance(e, DataAccessError):
            logger.exception("Database error while trying to %s", action)
            return _error("Database operation failed", 500)
        logger.exception("Unexpected error while trying to %s", action)
        return _error("An unexpected error occurred", 500)

    def _json_body() -> Optional[dict]:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else None

    @app.errorhandler(HTTPException)
    def api_http_error(e: HTTPException):
        # JSON for unknown API routes / wrong methods, default pages elsewhere.
        if request.path.startswith("/api/"):
            resp, status = _error(e.description or e.name, e.code or 500)
            # keep Allow on 405 and the like
            for key, value in e.get_headers():
                if key.lower() != "content-type":
                    resp.headers[key] = value
            return resp, status
        return e

    @app.route(f"{API_PREFIX}/health", methods=["GET"], endpoint="api_health")
    def api_health():
        try:
            count = service.count_active()
        except Exception:
            logger.exception("Health check failed")
            return jsonify({"status": "DOWN", "message": "Database connection failed"}), 503

        return jsonify(
            {
                "status": "UP",
                "message": "Employee Records service is running",
                "timestamp": epoch_millis(datetime.now()),
                "employeeCount": count,
                "database": f"MySQL - {container.database_name}",
            }
        )

    @app.route(API_PREFIX, methods=["GET"], endpoint="api_list_employees")
    def api_list_employees():
        try:
            page_request = parse_page_request(request.args)
            page = service.browse(
                page_request,
                search=request.args.get("search"),
                department=request.args.get("department"),
            )
            body = {"employees": [e.to_dict() for e in page.items]}
            body.update(page.metadata())
            return jsonify(body)
        except ValidationError as e:
            return _validation_error(e)
        except Exception as e:
            return _server_error("fetch employees", e)

    @app.route(f"{API_PREFIX}/<int:employee_id>", methods=["GET"], endpoint="api_get_employee")
    def api_get_employee(employee_id: int):
        try:
            return jsonify({"employee": service.get(employee_id).to_dict()})
        except EmployeeNotFoundError as e:
            return _error(str(e), 404)
        except Exception as e:
            return _server_error("fetch employee", e)

    @app.route(API_PREFIX, methods=["POST"], endpoint="api_create_employee")
    def api_create_employee():
        try:
            data = _json_body()
            if data is None:
                return _error("Request body must be a JSON object", 400)

            employee = service.create(parse_employee_input(data))
            return jsonify({"message": "Employee created successfully", "employee": employee.to_dict()}), 201
        except ValidationError as e:
            return _validation_error(e)
        except DuplicateEmailError as e:
            return _error(str(e), 400, errors={"email": "Email already exists"})
        except Exception as e:
            return _server_error("create employee", e)

    @app.route(f"{API_PREFIX}/<int:employee_id>", methods=["PUT"], endpoint="api_update_employee")
    def api_update_employee(employee_id: int):
        try:
            data = _json_body()
            if data is None:
                return _error("Request body must be a JSON object", 400)

            employee = service.update(employee_id, parse_employee_input(data))
            return jsonify({"message": "Employee updated successfully", "employee": employee.to_dict()})
        except ValidationError as e:
            return _validation_error(e)
        except EmployeeNotFoundError as e:
            return _error(str(e), 404)
        except DuplicateEmailError as e:
            return _error(str(e), 400, errors={"email": "Email already exists"})
        except Exception as e:
            return _server_error("update employee", e)

    @app.route(f"{API_PREFIX}/<int:employee_id>", methods=["DELETE"], endpoint="api_delete_employee")
    def api_delete_employee(employee_id: int):
        try:
            service.soft_delete(employee_id)
            return jsonify({"message": "Employee deleted successfully"})
        except EmployeeNotFoundError as e:
            return _error(str(e), 404)
        except Exception as e:
            return _server_error("delete employee", e)

    @app.route(f"{API_PREFIX}/<int:employee_id>/permanent", methods=["DELETE"], endpoint="api_purge_employee")
    def api_purge_employee(employee_id: int):
        try:
            removed = service.hard_delete(employee_id)
            return jsonify({"message": "Employee permanently deleted", "removed": removed})
        except Exception as e:
            return _server_error("permanently delete employee", e)

    @app.route(f"{API_PREFIX}/statistics", methods=["GET"], endpoint="api_statistics")
    def api_statistics():
        try:
            return jsonify(service.statistics().to_dict())
        except Exception as e:
            return _server_error("fetch statistics", e)

    @app.route(f"{API_PREFIX}/departments", methods=["GET"], endpoint="api_departments")
    def api_departments():
        try:
            return jsonify(service.departments())
        except Exception as e:
            return _server_error("fetch departments", e)
