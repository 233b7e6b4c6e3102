"""
Supabase JWT Authentication for CodeIR.
Validates Bearer tokens on all /api/ routes except public endpoints and
exposes the caller's id, email and role on Flask's `g`.
"""
import os
from functools import wraps

import jwt
from flask import request, jsonify, g

from codeir.services.session_router import normalize_role


# Routes that don't require authentication
PUBLIC_EXACT = [
    '/api/health',
    '/api/auth/signup',
    '/api/auth/login',
]


def get_jwt_secret():
    """Get the Supabase JWT secret from environment."""
    secret = os.getenv('SUPABASE_JWT_SECRET')
    if not secret:
        raise RuntimeError('SUPABASE_JWT_SECRET not configured')
    return secret


def validate_token(token):
    """
    Validate a Supabase JWT and return the decoded payload.
    Returns None if invalid.
    """
    try:
        payload = jwt.decode(
            token,
            get_jwt_secret(),
            algorithms=['HS256'],
            audience='authenticated',
        )
        return payload
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def role_from_claims(payload):
    """Role stored in user metadata at signup; students by default."""
    meta = payload.get('user_metadata') or {}
    return normalize_role(meta.get('role'))


def is_public_route(path):
    """Check if a route is public (no auth required)."""
    return path in PUBLIC_EXACT


def bearer_token():
    """Token from the Authorization header, or None."""
    auth_header = request.headers.get('Authorization', '')
    if not auth_header.startswith('Bearer '):
        return None
    return auth_header[7:] or None


def init_auth(app):
    """
    Register the before_request auth hook on the Flask app.
    Call this BEFORE registering blueprints.
    """
    @app.before_request
    def check_auth():
        if not request.path.startswith('/api/'):
            return None

        if request.method == 'OPTIONS' or is_public_route(request.path):
            return None

        token = bearer_token()
        if token is None:
            return jsonify({'error': 'Authentication required'}), 401

        payload = validate_token(token)
        if payload is None:
            return jsonify({'error': 'Invalid or expired token'}), 401

        g.user_id = payload.get('sub')
        g.user_email = payload.get('email', '')
        g.user_role = role_from_claims(payload)
        g.access_token = token


def current_session():
    """Session dict for the view router."""
    return {
        'user_id': g.user_id,
        'email': g.user_email,
        'role': g.user_role,
    }


def require_role(role):
    """Reject callers whose role flag is not `role` with a 403."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if getattr(g, 'user_role', None) != role:
                return jsonify({'error': f'This action requires the {role} role'}), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator
