"""
CodeIR API Routes
=================

All API route blueprints for the CodeIR application.

Usage:
    from codeir.routes import register_routes
    register_routes(app)
"""
from .auth_routes import auth_bp
from .student_routes import student_bp
from .instructor_routes import instructor_bp


def register_routes(app):
    """Register all route blueprints with the Flask app."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(student_bp)
    app.register_blueprint(instructor_bp)


__all__ = [
    'register_routes',
    'auth_bp',
    'student_bp',
    'instructor_bp',
]
