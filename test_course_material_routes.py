from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

import routes.course_material_routes as material_routes
import utils.viewer_details as viewer_details
from models.user_models import db

SYLLABUS_URL = "/course-materials/word/syllabus"


def week_url(week, /, **params):
    query = "&".join(f"{k}={v}" for k, v in params.items())
    return f"/course-materials/word/week/{week}" + (f"?{query}" if query else "")


# --- authentication -------------------------------------------------------

@pytest.mark.parametrize("url", [SYLLABUS_URL, week_url(1), week_url(8, class_id=1)])
def test_anonymous_user_is_sent_to_login(client, seeded, url):
    response = client.get(url)
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/login")


@pytest.mark.parametrize("role", ["admin", "parent", "", None])
def test_disallowed_role_is_sent_to_login(client, seeded, login, role):
    login(seeded["student"], role)
    response = client.get(week_url(1))
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/login")


def test_non_numeric_user_id_is_sent_to_login(client, seeded, login):
    login("not-a-number", "student")
    response = client.get(SYLLABUS_URL)
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/login")


# --- authorization --------------------------------------------------------

def test_unenrolled_student_is_sent_to_dashboard(client, seeded, login):
    login(seeded["excel_student"], "student")
    response = client.get(week_url(2))
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/student/dashboard")


def test_instructor_without_word_class_is_sent_to_instructor_dashboard(client, seeded, login):
    login(9999, "instructor")
    response = client.get(SYLLABUS_URL)
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/instructor/dashboard")


def test_class_scoped_denial_is_403(client, seeded, login):
    login(seeded["student"], "student")
    response = client.get(week_url(3, class_id=seeded["other_word_class"]))
    assert response.status_code == 403
    body = response.get_data(as_text=True)
    assert "Access Denied" in body
    assert "Welcome to Week 3!" not in body


def test_instructor_cannot_open_another_instructors_class(client, seeded, login):
    login(seeded["instructor"], "instructor")
    response = client.get(week_url(6, class_id=seeded["other_word_class"]))
    assert response.status_code == 403


def test_invalid_class_id_is_treated_as_absent(client, seeded, login):
    login(seeded["student"], "student")
    response = client.get(week_url(4, class_id="abc"))
    assert response.status_code == 200
    assert "Dashboard" in response.get_data(as_text=True)


def test_syllabus_ignores_class_scope_for_access(client, seeded, login):
    login(seeded["student"], "student")
    # Not enrolled in other_word_class, but the syllabus is program-wide
    response = client.get(f"{SYLLABUS_URL}?class_id={seeded['other_word_class']}")
    assert response.status_code == 200
    assert "Complete Course Syllabus" in response.get_data(as_text=True)


def test_unknown_week_is_404(client, seeded, login):
    login(seeded["student"], "student")
    assert client.get(week_url(9)).status_code == 404
    assert client.get(week_url(0)).status_code == 404


def test_database_failure_shows_error_page(client, seeded, login, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT COUNT(*)", {}, Exception("connection refused"))

    monkeypatch.setattr(material_routes, "has_material_access", broken)
    login(seeded["student"], "student")
    response = client.get(week_url(1))
    assert response.status_code == 500
    assert "Database connection failed" in response.get_data(as_text=True)


# --- rendering ------------------------------------------------------------

@pytest.mark.parametrize("week", range(1, 9))
def test_every_week_renders_for_enrolled_student(client, seeded, login, week):
    login(seeded["student"], "student")
    response = client.get(week_url(week, class_id=seeded["word_class"]))
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/html; charset=utf-8"
    body = response.get_data(as_text=True)
    assert f"Week {week} of 8" in body
    assert "Student Access - ada@example.com" in body


def test_class_page_shows_class_instructor(client, seeded, login):
    login(seeded["completed_student"], "student")
    body = client.get(week_url(5, class_id=seeded["other_word_class"])).get_data(as_text=True)
    assert "<strong>Instructor:</strong> Alan Turing" in body
    assert "<strong>Contact:</strong> alan@example.com" in body


def test_instructor_view_without_class_uses_default_instructor(client, seeded, login):
    login(seeded["instructor"], "instructor")
    body = client.get(week_url(1)).get_data(as_text=True)
    assert "Instructor Access - grace@example.com" in body
    assert "<strong>Instructor:</strong> Your Instructor" in body
    assert "instructor@impactdigitalacademy.com" in body


def test_session_cached_instructor_is_used_when_no_row(client, seeded, login):
    login(seeded["instructor"], "instructor", instructor_name="Dean Office", instructor_email="dean@example.com")
    body = client.get(SYLLABUS_URL).get_data(as_text=True)
    assert "<strong>Instructor:</strong> Dean Office" in body


def test_navigation_keeps_class_scope(client, seeded, login):
    login(seeded["student"], "student")
    class_id = seeded["word_class"]
    body = client.get(week_url(4, class_id=class_id)).get_data(as_text=True)
    assert f'href="/course-materials/word/week/3?class_id={class_id}"' in body
    assert f'href="/course-materials/word/week/5?class_id={class_id}"' in body
    assert f'href="/student/classes/{class_id}"' in body
    assert "download=pdf" in body


def test_first_and_last_week_have_one_neighbour(client, seeded, login):
    login(seeded["student"], "student")
    first = client.get(week_url(1)).get_data(as_text=True)
    last = client.get(week_url(8)).get_data(as_text=True)
    assert "/course-materials/word/week/2" in first
    assert "/course-materials/word/week/0" not in first
    assert "/course-materials/word/week/7" in last
    assert "/course-materials/word/week/9" not in last


def test_week7_practice_file_uses_first_name(client, seeded, login):
    login(seeded["student"], "student")
    body = client.get(week_url(7)).get_data(as_text=True)
    assert "Ada_Week7_Cleaned.docx" in body


def test_syllabus_shows_program_duration(client, seeded, login, monkeypatch):
    monkeypatch.setattr(material_routes, "today", lambda: date(2026, 1, 5))
    login(seeded["student"], "student")
    body = client.get(SYLLABUS_URL).get_data(as_text=True)
    assert "8 Weeks (January 5, 2026 - March 2, 2026)" in body
    assert "<strong>Date Accessed:</strong> January 5, 2026" in body


def test_user_fields_are_escaped(client, seeded, login, monkeypatch):
    monkeypatch.setattr(material_routes, "has_material_access", lambda *args: True)
    login(9999, "instructor", user_email="<script>x</script>@example.com")
    body = client.get(week_url(2)).get_data(as_text=True)
    assert "<script>x</script>@example.com" not in body
    assert "&lt;script&gt;x&lt;/script&gt;@example.com" in body


def test_repeated_requests_render_identically(client, seeded, login, monkeypatch):
    monkeypatch.setattr(material_routes, "today", lambda: date(2026, 10, 19))
    login(seeded["student"], "student")
    url = week_url(2, class_id=seeded["word_class"])
    assert client.get(url).get_data() == client.get(url).get_data()


def test_health_reports_database_ok(client, seeded):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert b"Database connection OK" in resp.data


@pytest.mark.parametrize("url", [week_url(1, week=3), SYLLABUS_URL + "?_method=POST"])
def test_extra_query_parameters_do_not_break_the_page(client, seeded, login, url):
    login(seeded["student"], "student")
    response = client.get(url)
    assert response.status_code == 200
    assert "download=pdf" in response.get_data(as_text=True)


def test_page_renders_with_session_values_when_detail_lookups_fail(client, seeded, login, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT users", {}, Exception("connection refused"))

    monkeypatch.setattr(db.session, "get", broken)
    monkeypatch.setattr(viewer_details, "_class_instructor", broken)
    login(seeded["student"], "student", first_name="Cached", last_name="Student",
          user_email="cached@example.com", instructor_name="Cached Teacher")
    response = client.get(week_url(2, class_id=seeded["word_class"]))
    body = response.get_data(as_text=True)
    assert response.status_code == 200
    assert "Cached Student" in body
    assert "Cached Teacher" in body
