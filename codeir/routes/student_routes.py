"""
Student API routes for CodeIR.
Dashboard (stats, activity heatmap, recent submissions) and the code editor
(validate, submit).
"""
import logging
from flask import Blueprint, jsonify, g

from codeir.audit import audit_log
from codeir.auth import require_role
from codeir.routes.helpers import json_body, string_field, string_list_field
from codeir.services import dashboard_service, ir_service
from codeir.services.session_router import ROLE_STUDENT
from codeir.services.supabase_client import get_user_client

student_bp = Blueprint('student', __name__)
logger = logging.getLogger(__name__)


@student_bp.route('/api/student/dashboard', methods=['GET'])
@require_role(ROLE_STUDENT)
def get_dashboard():
    """The caller's submissions with stats, heatmap and activity rows."""
    try:
        db = get_user_client(g.access_token)
        result = db.table('submissions').select(
            '*, evaluations ( feedback )'
        ).eq('user_id', g.user_id).order('created_at', desc=True).execute()
    except Exception as e:
        logger.error("Error fetching dashboard for %s: %s", g.user_id, str(e))
        return jsonify({"error": str(e)}), 500

    submissions = result.data or []

    return jsonify({
        "profile": {
            "email": g.user_email,
            "display_name": dashboard_service.display_name(g.user_email),
        },
        "stats": dashboard_service.student_stats(submissions),
        "heatmap": dashboard_service.build_heatmap(submissions),
        "submissions": [dashboard_service.student_row(s) for s in submissions],
    })


@student_bp.route('/api/editor/defaults', methods=['GET'])
@require_role(ROLE_STUDENT)
def get_editor_defaults():
    """Initial editor contents, target languages and hints."""
    return jsonify(ir_service.editor_defaults())


@student_bp.route('/api/editor/validate', methods=['POST'])
@require_role(ROLE_STUDENT)
def validate_code():
    """Generate the IR summary and translated code for the editor."""
    try:
        data = json_body()
        result = ir_service.validate_source(string_field(data, 'source_code'), string_field(data, 'language', None))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(result)


@student_bp.route('/api/submissions', methods=['POST'])
@require_role(ROLE_STUDENT)
def submit_code():
    """Save the editor contents as a new submission."""
    try:
        data = json_body()
        source_code = string_field(data, 'source_code')
        description = string_field(data, 'description')
        ir_output = string_field(data, 'ir_output')
        hints = string_list_field(data, 'hints')
        language = ir_service.check_language(string_field(data, 'language', None))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    if not source_code.strip():
        return jsonify({"error": "Source code is required"}), 400

    row = {
        "user_id": g.user_id,
        "source_code": source_code,
        "description": description,
        "language": language,
        "ir_output": ir_output or ir_service.DEFAULT_IR,
        "status": "submitted",
    }

    try:
        db = get_user_client(g.access_token)
        result = db.table('submissions').insert(row).execute()
    except Exception as e:
        logger.error("Error submitting code for %s: %s", g.user_id, str(e))
        return jsonify({"error": "Error submitting: " + str(e)}), 500

    submission = result.data[0] if result.data else row
    audit_log("SUBMIT_CODE", f"submission={submission.get('id', '')} language={language}", user=g.user_id)

    return jsonify({
        "success": True,
        "message": "Code submitted successfully!",
        "submission": submission,
        "hints": ir_service.hints_after_submit(hints),
    }), 201
