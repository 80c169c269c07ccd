"""
Auth Blueprint - Authentication and session status
Handles: Register, Login, Logout, Status
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

from . import routes
