"""
Decorators Module - Authentication and authorization decorators
"""

from functools import wraps
from flask import jsonify
from .auth import get_auth_status


def login_required(f):
    """Decorator to require a signed-in user"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not get_auth_status().is_authenticated:
            return jsonify({'success': False, 'message': 'Please sign in to continue.'}), 401
        return f(*args, **kwargs)
    return decorated_function


def owner_required(f):
    """Decorator to require the portfolio owner"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth = get_auth_status()
        if not auth.is_authenticated:
            return jsonify({'success': False, 'message': 'Please sign in to continue.'}), 401
        if not auth.is_owner:
            return jsonify({'success': False, 'message': 'Owner access required.'}), 403
        return f(*args, **kwargs)
    return decorated_function
