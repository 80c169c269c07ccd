"""
Shared Flask extensions, created unbound and attached in create_app()
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

db = SQLAlchemy()

# JSON API: unauthorized requests get a 401 body rather than a login redirect
login_manager = LoginManager()
login_manager.session_protection = 'basic'

__all__ = ['db', 'login_manager']
