import logging
from urllib.parse import urlencode

from flask import (Blueprint, render_template, session, flash, redirect, request,
                   current_app, url_for, abort, make_response)

from utils.access_control import ALLOWED_ROLES, parse_class_id, has_material_access
from utils.viewer_details import load_user_details, load_instructor_details
from utils.materials import SYLLABUS, PROGRAM_NAME, get_week, today, program_end
from utils.pdf_export import (PdfExportError, PdfLibraryUnavailable, INSTALL_COMMAND,
                              build_pdf_options, html_to_pdf)

logger = logging.getLogger(__name__)

# Blueprint registered as "course_material_routes"
course_material_routes = Blueprint("course_material_routes", __name__, url_prefix="/course-materials")


@course_material_routes.app_template_filter("long_date")
def long_date(value):
    """Format a date as 'October 5, 2026'."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def _require_material_viewer():
    """Return ((user_id, role), redirect_response) where redirect_response is None when OK."""
    role = session.get("user_role")
    try:
        user_id = int(session.get("user_id"))
    except (TypeError, ValueError):
        user_id = None

    if not user_id or role not in ALLOWED_ROLES:
        logger.warning(f"Unauthenticated material request: user_id={session.get('user_id')!r} role={role!r}")
        flash("You must be logged in as a student or instructor to view course materials.", "danger")
        return None, redirect(current_app.config["LOGIN_URL"])

    return (user_id, role), None


def _dashboard_url(role):
    return current_app.config["DASHBOARD_URL_TEMPLATE"].format(role=role)


def _class_home_url(role, class_id):
    return current_app.config["CLASS_HOME_URL_TEMPLATE"].format(role=role, class_id=class_id)


def _material_url(material, class_id=None):
    params = {"class_id": class_id} if class_id else {}
    if material.is_syllabus:
        return url_for("course_material_routes.word_syllabus", **params)
    return url_for("course_material_routes.word_week", week=material.week, **params)


def _material_context(material, user_id, role, class_id):
    viewer = load_user_details(user_id, session)
    viewer["role"] = role
    viewer["full_name"] = f"{viewer['first_name']} {viewer['last_name']}".strip()
    instructor = load_instructor_details(class_id, user_id, role, session)

    accessed_on = today()
    pdf_args = request.args.to_dict()
    pdf_args["download"] = "pdf"

    return {
        "material": material,
        "viewer": viewer,
        "instructor": instructor,
        "class_id": class_id,
        "today": accessed_on,
        "program_end": program_end(accessed_on),
        "academy_name": current_app.config["ACADEMY_NAME"],
        "program_name": PROGRAM_NAME,
        "back_url": _class_home_url(role, class_id) if class_id else _dashboard_url(role),
        "syllabus_url": _material_url(SYLLABUS, class_id),
        "previous_url": _material_url(material.previous, class_id) if material.previous else None,
        "next_url": _material_url(material.next, class_id) if material.next else None,
        "pdf_url": f"{request.base_url}?{urlencode(pdf_args)}",
    }


def _pdf_response(material, context):
    try:
        options = build_pdf_options(current_app.config)
        html = render_template("course_materials/word/material_pdf.html", pdf=options, **context)
        data = html_to_pdf(html, options)
    except PdfExportError as e:
        logger.error(f"PDF generation failed for {material.slug}: {e}")
        return render_template(
            "course_materials/pdf_error.html",
            material=material,
            error_message=str(e),
            library_missing=isinstance(e, PdfLibraryUnavailable),
            install_command=INSTALL_COMMAND,
        )

    filename = material.pdf_filename(context["today"])
    logger.info(f"Generated {filename} ({len(data)} bytes) for user {session.get('user_id')}")

    response = make_response(data)
    response.headers["Content-Type"] = "application/pdf"
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    response.headers["Content-Transfer-Encoding"] = "binary"
    response.headers["Cache-Control"] = "must-revalidate, post-check=0, pre-check=0"
    response.headers["Pragma"] = "public"
    return response


def _serve_material(material):
    viewer, redirect_resp = _require_material_viewer()
    if redirect_resp:
        return redirect_resp
    user_id, role = viewer

    class_id = parse_class_id(request.args.get("class_id"))
    access_scope = class_id if material.class_scoped_access else None

    if not has_material_access(user_id, role, access_scope):
        if access_scope is not None:
            logger.warning(f"User {user_id} ({role}) denied {material.slug} for class {class_id}")
            return render_template(
                "course_materials/access_denied.html",
                material=material,
                dashboard_url=_dashboard_url(role),
            ), 403

        logger.warning(f"User {user_id} ({role}) has no Word course access, redirecting to dashboard")
        flash("You do not have access to the Microsoft Word course materials.", "warning")
        return redirect(_dashboard_url(role))

    context = _material_context(material, user_id, role, class_id)

    if request.args.get("download") == "pdf":
        return _pdf_response(material, context)

    logger.info(f"Serving {material.slug} to user {user_id} ({role}) class={class_id}")
    return render_template("course_materials/word/material.html", **context)


@course_material_routes.route("/word/syllabus")
def word_syllabus():
    return _serve_material(SYLLABUS)


@course_material_routes.route("/word/week/<int:week>")
def word_week(week):
    material = get_week(week)
    if material is None:
        abort(404)
    return _serve_material(material)
