"""
Pages Blueprint - Site-level data and stored files
Handles: Site payload, project catalog, storage downloads
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes
