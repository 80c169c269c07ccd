"""
Dashboard Blueprint - Signed-in dashboard
Handles: Projects, meetings and messages, owner moderation actions
"""

from flask import Blueprint

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/dashboard')

from . import routes
