# File: api/auth.py
import hmac
from functools import wraps
from typing import Optional

from flask import request, abort

from config import settings


def _presented_key() -> Optional[str]:
    """Key sent as 'Authorization: Bearer <key>' or 'x-api-key: <key>'."""
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header[len('Bearer '):].strip()
    return request.headers.get('x-api-key')


def require_api_key(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        expected = settings.API_KEY
        presented = _presented_key()
        if expected and presented and hmac.compare_digest(presented.encode(), expected.encode()):
            return f(*args, **kwargs)
        abort(401)
    return decorated_function
