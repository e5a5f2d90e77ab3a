import os
import logging
import tempfile
from datetime import timedelta
from flask import Flask, render_template
from models.user_models import db
from models import class_model, course_model, enrollment_model   # ✅ Register all mapped tables
from routes.course_material_routes import course_material_routes
from dotenv import load_dotenv   # ✅ Import dotenv
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

# ✅ Load environment variables from .env file
load_dotenv()

app = Flask(__name__)

# ✅ Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# ✅ Secret key from environment
app.secret_key = os.getenv("SECRET_KEY", "default_secret")

# Session lifetime (in days) for sessions marked permanent by the login flow.
remember_days = int(os.getenv('REMEMBER_DAYS', '30'))
app.permanent_session_lifetime = timedelta(days=remember_days)

# ✅ Database configuration from environment
app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv("DATABASE_URL", "sqlite:///course_materials.db")
app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

# ✅ Pool options for the PostgreSQL (Neon) connection; SQLite picks its own pool
if not app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
        "pool_pre_ping": True,  # ✅ Prevent "SSL connection has been closed unexpectedly"
        "pool_size": 5,
        "max_overflow": 10,
        "pool_recycle": 1800
    }

# ✅ Portal links owned by the login / dashboard modules
app.config["LOGIN_URL"] = os.getenv("LOGIN_URL", "/login")
app.config["DASHBOARD_URL_TEMPLATE"] = os.getenv("DASHBOARD_URL_TEMPLATE", "/{role}/dashboard")
app.config["CLASS_HOME_URL_TEMPLATE"] = os.getenv("CLASS_HOME_URL_TEMPLATE", "/{role}/classes/{class_id}")

# ✅ Display defaults
app.config["ACADEMY_NAME"] = os.getenv("ACADEMY_NAME", "Impact Digital Academy")
app.config["DEFAULT_INSTRUCTOR_NAME"] = os.getenv("DEFAULT_INSTRUCTOR_NAME", "Your Instructor")
app.config["DEFAULT_INSTRUCTOR_EMAIL"] = os.getenv("DEFAULT_INSTRUCTOR_EMAIL", "instructor@impactdigitalacademy.com")

# ✅ PDF converter settings (millimetres for margins)
app.config["PDF_PAGE_SIZE"] = os.getenv("PDF_PAGE_SIZE", "A4")
app.config["PDF_MARGINS_MM"] = {
    "left": 15,
    "right": 15,
    "top": 20,
    "bottom": 20,
    "header": 10,
    "footer": 10,
}
app.config["PDF_FONT_FAMILY"] = os.getenv("PDF_FONT_FAMILY", "Helvetica")
app.config["PDF_FONT_SIZE"] = int(os.getenv("PDF_FONT_SIZE", "12"))
app.config["PDF_TEMP_DIR"] = os.getenv("PDF_TEMP_DIR", tempfile.gettempdir())

# ✅ Initialize DB
db.init_app(app)

# ✅ Register Blueprints
app.register_blueprint(course_material_routes)


# ✅ RESPONSE UTF-8 CHARSET MIDDLEWARE
@app.after_request
def ensure_utf8_charset(response):
    """Ensure all text responses include UTF-8 charset in Content-Type header."""
    content_type = response.headers.get('Content-Type', '')

    # ONLY modify text/html responses, PDF downloads are left untouched
    if content_type.startswith('text/html'):
        if 'charset' not in content_type:
            response.headers['Content-Type'] = 'text/html; charset=utf-8'

    return response


# ✅ GLOBAL ERROR HANDLER for database failures
@app.errorhandler(SQLAlchemyError)
def handle_db_error(error):
    """Database unreachable or query failed: roll back and show the error page."""
    logger.error(f"[DB ERROR] {str(error)}")
    try:
        db.session.rollback()
    except SQLAlchemyError as rollback_error:
        logger.error(f"[DB ROLLBACK ERROR] Failed to rollback: {str(rollback_error)}")

    return render_template(
        "errors/database_error.html",
        message="Database connection failed. Please check your configuration.",
    ), 500


# ✅ Health check route for DB connection
@app.route("/health")
def health():
    try:
        with db.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return "Database connection OK"
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {str(e)}")
        return f"Database connection failed: {str(e)}", 503


# ✅ Entry point for local testing
if __name__ == "__main__":
    logger.info("Starting Flask app locally...")
    app.run(debug=True)
