"""
Request body helpers shared by the route blueprints.
Malformed bodies raise ValueError so handlers can answer with a 400.
"""
import uuid

from flask import request


def json_body():
    """The request's JSON object; an empty dict when no body was sent."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def string_field(data, key, default=''):
    """A string field from the body. Missing or null -> default."""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def string_list_field(data, key):
    """A list-of-strings field from the body, or None when absent."""
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{key} must be a list of strings")
    return value


def is_uuid(value):
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True
