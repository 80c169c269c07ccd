"""
Portfolio Blueprint - Public portfolio sections
Handles: About tabs, GitHub activity, services, team, reviews, contact form
"""

from flask import Blueprint

portfolio_bp = Blueprint('portfolio', __name__, url_prefix='')

from . import routes
