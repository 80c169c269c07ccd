"""
Auth Module - Explicit authentication status for the current request

The status is built once per request from the Flask-Login session and
handed to views and responses; nothing else reads the session to decide
what an anonymous or signed-in visitor may see.
"""

from dataclasses import dataclass
from typing import Optional
from flask import g
from flask_login import current_user


@dataclass(frozen=True)
class AuthStatus:
    is_authenticated: bool = False
    user_id: Optional[str] = None
    username: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_owner(self) -> bool:
        return self.is_authenticated and self.role == 'owner'

    @property
    def show_login_link(self) -> bool:
        return not self.is_authenticated

    def to_dict(self):
        return {
            'isAuthenticated': self.is_authenticated,
            'userId': self.user_id,
            'username': self.username,
            'role': self.role,
            'isOwner': self.is_owner,
            'showLoginLink': self.show_login_link,
        }


ANONYMOUS = AuthStatus()


def status_for(user) -> AuthStatus:
    if user is None or not getattr(user, 'is_authenticated', False):
        return ANONYMOUS
    return AuthStatus(
        is_authenticated=True,
        user_id=user.id,
        username=user.username,
        role=user.role,
    )


def load_auth_status():
    """before_request hook: resolve the session once and keep it on ``g``"""
    g.auth = status_for(current_user)


def set_auth_status(user):
    """Called at login so the rest of the request sees the new session"""
    g.auth = status_for(user)


def clear_auth_status():
    """Called at logout"""
    g.auth = ANONYMOUS


def get_auth_status() -> AuthStatus:
    return g.get('auth', ANONYMOUS)


__all__ = [
    'AuthStatus',
    'ANONYMOUS',
    'status_for',
    'load_auth_status',
    'set_auth_status',
    'clear_auth_status',
    'get_auth_status'
]
