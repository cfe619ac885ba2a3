from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.pagination import PageRequest
from ..common.validators import parse_employee_input, parse_page_request
from ..core.constants import DASHBOARD_RECENT_LIMIT, DEFAULT_PAGE_SIZE, DEFAULT_SORT_BY, DEFAULT_SORT_DIRECTION, DEPARTMENTS
from ..core.enums import SortDirection
from ..core.exceptions import DuplicateEmailError, ValidationError
from ..container import Container
from .model import Employee

logger = logging.getLogger(__name__)


def _form_values(employee: Employee) -> dict:
    return {
        "firstName": employee.first_name,
        "lastName": employee.last_name,
        "email": employee.email,
        "department": employee.department,
        "position": employee.position,
        "hireDate": employee.hire_date.isoformat() if employee.hire_date else "",
        "salary": str(employee.salary) if employee.salary is not None else "",
    }


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    def _department_choices() -> list[str]:
        try:
            known = service.departments()
        except Exception:
            logger.exception("Could not load department list")
            known = []
        return sorted(set(DEPARTMENTS) | set(known))

    def _render_form(*, form: dict, errors: dict, page_title: str, action: str, status: int = 200):
        return (
            render_template(
                "employees/form.html",
                form=form,
                errors=errors,
                page_title=page_title,
                action=action,
                departments=_department_choices(),
            ),
            status,
        )

    @app.route("/", endpoint="home")
    def home():
        return redirect(url_for("employees_list"))

    @app.route("/employees", endpoint="employees_list")
    def employees_list():
        search = (request.args.get("search") or "").strip()
        department = (request.args.get("department") or "").strip()
        sort_by = request.args.get("sortBy") or DEFAULT_SORT_BY
        sort_direction = (request.args.get("sortDirection") or DEFAULT_SORT_DIRECTION).lower()

        try:
            page_request = parse_page_request(request.args)
        except ValidationError as e:
            flash(f"Invalid listing parameters: {e}", "warning")
            sort_by, sort_direction = DEFAULT_SORT_BY, DEFAULT_SORT_DIRECTION
            page_request = PageRequest(page=0, size=DEFAULT_PAGE_SIZE)

        page = None
        statistics = None
        try:
            page = service.browse(page_request, search=search, department=department)
            statistics = service.statistics()
        except Exception:
            logger.exception("Error loading employees")
            flash("System error while loading employees", "danger")

        return render_template(
            "employees/list.html",
            page=page,
            employees=page.items if page else [],
            statistics=statistics,
            search=search,
            selected_department=department,
            sort_by=sort_by,
            sort_direction=sort_direction,
            size=page_request.size,
            departments=_department_choices(),
            active_page="employees",
        )

    @app.route("/employees/add", methods=["GET", "POST"], endpoint="employees_add")
    def employees_add():
        action = url_for("employees_add")
        if request.method == "GET":
            return _render_form(form={}, errors={}, page_title="Add New Employee", action=action)

        form = request.form.to_dict()
        try:
            employee = service.create(parse_employee_input(form))
            flash(f"Employee {employee.full_name} has been added successfully!", "success")
            return redirect(url_for("employees_list"))
        except ValidationError as e:
            return _render_form(form=form, errors=e.as_dict(), page_title="Add New Employee", action=action, status=400)
        except DuplicateEmailError as e:
            flash(str(e), "danger")
            errors = {"email": "Email already exists"}
            return _render_form(form=form, errors=errors, page_title="Add New Employee", action=action, status=400)
        except Exception:
            logger.exception("Error adding employee")
            flash("System error while adding employee", "danger")
            return _render_form(form=form, errors={}, page_title="Add New Employee", action=action, status=500)

    @app.route("/employees/edit/<int:employee_id>", methods=["GET", "POST"], endpoint="employees_edit")
    def employees_edit(employee_id: int):
        action = url_for("employees_edit", employee_id=employee_id)
        try:
            current = service.find(employee_id)
        except Exception:
            logger.exception("Error loading employee %s", employee_id)
            flash("System error while loading employee", "danger")
            return redirect(url_for("employees_list"))

        if current is None:
            flash("Employee not found!", "danger")
            return redirect(url_for("employees_list"))

        if request.method == "GET":
            return _render_form(form=_form_values(current), errors={}, page_title="Edit Employee", action=action)

        form = request.form.to_dict()
        try:
            employee = service.update(employee_id, parse_employee_input(form))
            flash(f"Employee {employee.full_name} has been updated successfully!", "success")
            return redirect(url_for("employees_list"))
        except ValidationError as e:
            return _render_form(form=form, errors=e.as_dict(), page_title="Edit Employee", action=action, status=400)
        except DuplicateEmailError as e:
            flash(str(e), "danger")
            errors = {"email": "Email already exists"}
            return _render_form(form=form, errors=errors, page_title="Edit Employee", action=action, status=400)
        except Exception:
            logger.exception("Error updating employee %s", employee_id)
            flash("System error while updating employee", "danger")
            return _render_form(form=form, errors={}, page_title="Edit Employee", action=action, status=500)

    @app.route("/employees/view/<int:employee_id>", endpoint="employees_view")
    def employees_view(employee_id: int):
        try:
            employee = service.find(employee_id)
        except Exception:
            logger.exception("Error loading employee %s", employee_id)
            flash("System error while loading employee", "danger")
            return redirect(url_for("employees_list"))

        if employee is None:
            flash("Employee not found!", "danger")
            return redirect(url_for("employees_list"))

        return render_template("employees/view.html", employee=employee, active_page="employees")

    @app.route("/employees/delete/<int:employee_id>", methods=["POST"], endpoint="employees_delete")
    def employees_delete(employee_id: int):
        try:
            employee = service.find(employee_id)
            if employee is None:
                flash("Employee not found!", "danger")
            else:
                service.soft_delete(employee_id)
                flash(f"Employee {employee.full_name} has been deleted successfully!", "success")
        except Exception:
            logger.exception("Error deleting employee %s", employee_id)
            flash("System error while deleting employee", "danger")

        return redirect(url_for("employees_list"))

    @app.route("/dashboard", endpoint="dashboard")
    def dashboard():
        statistics = None
        recent: list[Employee] = []
        try:
            statistics = service.statistics()
            recent_request = PageRequest(
                page=0, size=DASHBOARD_RECENT_LIMIT, sort_by="created_at", direction=SortDirection.DESC
            )
            recent = list(service.list_active(recent_request).items)
        except Exception:
            logger.exception("Error loading dashboard")
            flash("System error while loading dashboard", "danger")

        return render_template("dashboard.html", statistics=statistics, recent_employees=recent, active_page="dashboard")
