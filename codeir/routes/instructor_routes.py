"""
Instructor API routes for CodeIR.
Review dashboard, the evaluation workspace (rubric scores + feedback) and
the audit trail.
"""
import logging
from flask import Blueprint, request, jsonify, g

from codeir.audit import audit_log, get_audit_logs
from codeir.auth import require_role
from codeir.routes.helpers import json_body, string_field, is_uuid
from codeir.rubric_config import (
    RUBRIC_MAX_SCORES, RUBRIC_LABELS, RUBRIC_TOTAL,
    AUTO_GRADE_SCORES, AUTO_GRADE_FEEDBACK, parse_scores, total_score,
)
from codeir.services import dashboard_service, ir_service
from codeir.services.session_router import ROLE_INSTRUCTOR
from codeir.services.supabase_client import get_user_client

instructor_bp = Blueprint('instructor', __name__)
logger = logging.getLogger(__name__)

SANDBOX_NOT_SAVED = "Sandbox Mode: Evaluation generated but not saved (No student submission linked)."


def _rubric():
    return [
        {"key": key, "label": RUBRIC_LABELS[key], "max": max_score}
        for key, max_score in RUBRIC_MAX_SCORES.items()
    ]


@instructor_bp.route('/api/instructor/dashboard', methods=['GET'])
@require_role(ROLE_INSTRUCTOR)
def get_dashboard():
    """All submissions visible to the instructor with review counters."""
    try:
        db = get_user_client(g.access_token)
        result = db.table('submissions').select(
            '*, evaluations ( id, rubric_scores )'
        ).order('created_at', desc=True).execute()
    except Exception as e:
        logger.error("Error fetching instructor data: %s", str(e))
        return jsonify({"error": str(e)}), 500

    submissions = result.data or []

    return jsonify({
        "profile": {
            "email": g.user_email,
            "display_name": "Prof. " + dashboard_service.display_name(g.user_email),
        },
        "stats": dashboard_service.instructor_stats(submissions),
        "submissions": [dashboard_service.instructor_row(s) for s in submissions],
    })


@instructor_bp.route('/api/instructor/evaluation', methods=['GET'])
@instructor_bp.route('/api/instructor/evaluation/<submission_id>', methods=['GET'])
@require_role(ROLE_INSTRUCTOR)
def get_evaluation(submission_id=None):
    """
    Evaluation workspace for one submission, or the sandbox when no id is
    given.
    """
    workspace = {
        "sandbox": submission_id is None,
        "submission": None,
        "source_code": ir_service.SANDBOX_SOURCE,
        "language": ir_service.EVALUATION_LANGUAGE,
        "ir_view": ir_service.NO_IR,
        "rubric": _rubric(),
        "rubric_total": RUBRIC_TOTAL,
        "rubric_scores": {key: 0 for key in RUBRIC_MAX_SCORES},
        "feedback": "",
        "total": 0,
    }
    if submission_id is None:
        return jsonify(workspace)
    if not is_uuid(submission_id):
        return jsonify({"error": "Submission not found"}), 404

    try:
        db = get_user_client(g.access_token)
        result = db.table('submissions').select(
            '*, evaluations ( id, rubric_scores, feedback )'
        ).eq('id', submission_id).execute()
    except Exception as e:
        logger.error("Error fetching submission %s: %s", submission_id, str(e))
        return jsonify({"error": str(e)}), 500

    if not result.data:
        return jsonify({"error": "Submission not found"}), 404

    submission = result.data[0]
    workspace.update({
        "submission": submission,
        "source_code": submission.get('source_code') or "",
        "language": submission.get('language') or ir_service.EVALUATION_LANGUAGE,
        "ir_view": submission.get('ir_output') or ir_service.NO_IR,
    })

    evaluations = dashboard_service.evaluations_of(submission)
    if evaluations:
        existing = evaluations[0]
        scores = existing.get('rubric_scores') or {}
        workspace["rubric_scores"] = {key: scores.get(key) or 0 for key in RUBRIC_MAX_SCORES}
        workspace["feedback"] = existing.get('feedback') or ""

    workspace["total"] = total_score(workspace["rubric_scores"])
    return jsonify(workspace)


@instructor_bp.route('/api/instructor/auto-grade', methods=['POST'])
@require_role(ROLE_INSTRUCTOR)
def auto_grade():
    """Suggested rubric scores and feedback."""
    return jsonify({
        "rubric_scores": dict(AUTO_GRADE_SCORES),
        "feedback": AUTO_GRADE_FEEDBACK,
        "total": total_score(AUTO_GRADE_SCORES),
    })


@instructor_bp.route('/api/instructor/evaluations', methods=['POST'])
@require_role(ROLE_INSTRUCTOR)
def save_evaluation():
    """
    Save (or replace) the evaluation for a submission.
    One evaluation per submission: upserts on submission_id.
    """
    try:
        data = json_body()
        scores = parse_scores(data.get('rubric_scores'))
        submission_id = string_field(data, 'submission_id')
        feedback = string_field(data, 'feedback')
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    if not submission_id:
        return jsonify({"saved": False, "sandbox": True, "message": SANDBOX_NOT_SAVED})
    if not is_uuid(submission_id):
        return jsonify({"error": "submission_id must be a UUID"}), 400

    row = {
        "submission_id": submission_id,
        "instructor_id": g.user_id,
        "rubric_scores": scores,
        "feedback": feedback,
    }

    try:
        db = get_user_client(g.access_token)
        result = db.table('evaluations').upsert(row, on_conflict='submission_id').execute()
    except Exception as e:
        logger.error("Error saving evaluation for %s: %s", submission_id, str(e))
        return jsonify({"error": "Error saving evaluation: " + str(e)}), 500

    audit_log("SAVE_EVALUATION", f"submission={submission_id} total={total_score(scores)}", user=g.user_id)

    return jsonify({
        "saved": True,
        "message": "Evaluation saved successfully!",
        "evaluation": result.data[0] if result.data else row,
        "total": total_score(scores),
    })


@instructor_bp.route('/api/instructor/audit-log', methods=['GET'])
@require_role(ROLE_INSTRUCTOR)
def get_audit_log():
    """Recent submission and grading activity."""
    try:
        limit = int(request.args.get('limit', 100))
    except ValueError:
        return jsonify({"error": "limit must be a number"}), 400

    try:
        logs = get_audit_logs(limit)
    except OSError as e:
        logger.error("Error reading audit log: %s", str(e))
        return jsonify({"error": str(e)}), 500

    return jsonify({"logs": logs, "count": len(logs)})
