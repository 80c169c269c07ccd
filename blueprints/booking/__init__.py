"""
Booking Blueprint - Visitor intake forms
Handles: Project booking with file upload, training requests
"""

from flask import Blueprint

booking_bp = Blueprint('booking', __name__, url_prefix='')

from . import routes
