"""
Auth Routes for CodeIR.
Handles signup (with the role flag stored in user metadata), password login,
logout, and resolving which screen the caller should see.
"""
import logging
from flask import Blueprint, jsonify, g

from codeir.audit import audit_log
from codeir.auth import current_session
from codeir.routes.helpers import json_body, string_field
from codeir.services.session_router import (
    ROLES, ROLE_STUDENT, AUTH_VIEW, normalize_role, resolve_view, navigate, on_auth_event, view_from_dict,
)
from codeir.services.supabase_client import get_supabase

auth_bp = Blueprint('auth', __name__)
logger = logging.getLogger(__name__)

MISSING_FIELDS = "Please fill in all fields."


def _auth_error(e):
    """Message to show on the auth form for an SDK error."""
    return getattr(e, 'message', None) or str(e) or "Authentication failed"


def _credentials(data):
    email = string_field(data, 'email').strip()
    password = string_field(data, 'password')
    return email, password


def _serialize_user(user):
    meta = getattr(user, 'user_metadata', None) or {}
    return {
        "id": user.id,
        "email": getattr(user, 'email', ''),
        "role": normalize_role(meta.get('role')),
    }


def _serialize_session(session):
    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "expires_at": getattr(session, 'expires_at', None),
        "user": _serialize_user(session.user),
    }


@auth_bp.route('/api/auth/signup', methods=['POST'])
def signup():
    """
    Create an account. The role is saved in user metadata so no separate
    profile table write is needed.
    """
    try:
        data = json_body()
        email, password = _credentials(data)
        role = string_field(data, 'role') or ROLE_STUDENT
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    if not email or not password:
        return jsonify({"error": MISSING_FIELDS}), 400
    if role not in ROLES:
        return jsonify({"error": f"Unknown role: {role}"}), 400

    try:
        sb = get_supabase()
        res = sb.auth.sign_up({
            "email": email,
            "password": password,
            "options": {"data": {"role": role}},
        })
    except RuntimeError as e:
        logger.error("Signup unavailable: %s", e)
        return jsonify({"error": str(e)}), 500
    except Exception as e:
        logger.info("Signup rejected for %s: %s", email, _auth_error(e))
        return jsonify({"error": _auth_error(e)}), 400

    if res.user is None:
        return jsonify({"error": "Authentication failed"}), 400

    audit_log("SIGNUP", f"role={role}", user=res.user.id)

    if res.session is None:
        # Email confirmation required before the first login
        return jsonify({
            "status": "confirm_email",
            "message": "Signup initiated. Check email for confirmation.",
            "user": _serialize_user(res.user),
        })

    return jsonify({
        "status": "signed_in",
        "message": "Account created! Redirecting...",
        "session": _serialize_session(res.session),
        "view": resolve_view({"role": role}).to_dict(),
    })


@auth_bp.route('/api/auth/login', methods=['POST'])
def login():
    """Sign in with email and password. Returns the session and landing view."""
    try:
        email, password = _credentials(json_body())
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    if not email or not password:
        return jsonify({"error": MISSING_FIELDS}), 400

    try:
        sb = get_supabase()
        res = sb.auth.sign_in_with_password({"email": email, "password": password})
    except RuntimeError as e:
        logger.error("Login unavailable: %s", e)
        return jsonify({"error": str(e)}), 500
    except Exception as e:
        logger.info("Login rejected for %s: %s", email, _auth_error(e))
        return jsonify({"error": _auth_error(e)}), 400

    if res.session is None:
        return jsonify({"error": "Authentication failed"}), 400

    session = _serialize_session(res.session)
    audit_log("LOGIN", "", user=session["user"]["id"])

    return jsonify({
        "session": session,
        "view": resolve_view(session["user"]).to_dict(),
    })


@auth_bp.route('/api/auth/logout', methods=['POST'])
def logout():
    """Revoke the caller's session and send them back to the auth screen."""
    try:
        sb = get_supabase()
        sb.auth.admin.sign_out(g.access_token)
    except Exception as e:
        logger.error("Error signing out %s: %s", g.user_id, str(e))
        return jsonify({"error": "Failed to sign out"}), 500

    audit_log("LOGOUT", "", user=g.user_id)
    return jsonify({"status": "signed_out", "view": AUTH_VIEW.to_dict()})


@auth_bp.route('/api/session', methods=['GET'])
def get_session():
    """Current user and the screen the router picks for them."""
    session = current_session()
    return jsonify({
        "user": {"id": session["user_id"], "email": session["email"], "role": session["role"]},
        "view": resolve_view(session).to_dict(),
    })


@auth_bp.route('/api/session/navigate', methods=['POST'])
def navigate_view():
    """Switch pages within the caller's screen (e.g. dashboard -> editor)."""
    try:
        data = json_body()
        target = string_field(data, 'target')
        view = navigate(resolve_view(current_session()), target, string_field(data, 'submission_id', None))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"view": view.to_dict()})


@auth_bp.route('/api/session/event', methods=['POST'])
def session_event():
    """
    Apply a Supabase auth state change (SIGNED_IN, TOKEN_REFRESHED, ...)
    to the view the frontend is showing. Without a view the caller's landing
    view is used.
    """
    session = current_session()
    try:
        data = json_body()
        event = string_field(data, 'event')
        view = data.get('view')
        state = resolve_view(session) if view is None else view_from_dict(view)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    if not event:
        return jsonify({"error": "event is required"}), 400

    return jsonify({"event": event, "view": on_auth_event(state, event, session).to_dict()})
