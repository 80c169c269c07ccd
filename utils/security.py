"""
Security Module - Client IP lookup, rate limiting, and owner account seeding
"""

import threading
import time
from flask import request, current_app
from werkzeug.security import generate_password_hash, check_password_hash


# Rate Limiting
RATE_LIMIT_REQUESTS = {}  # {ip: [(timestamp, endpoint), ...]}
_rate_limit_lock = threading.Lock()


def get_client_ip():
    """Get real client IP address"""
    forwarded = request.environ.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.environ.get('REMOTE_ADDR', 'unknown')


def check_rate_limit(endpoint='contact'):
    """Check if IP is within rate limit for an endpoint"""
    client_ip = get_client_ip()
    current_time = time.time()
    max_requests = current_app.config.get('RATE_LIMIT_MAX_REQUESTS', 10)
    window = current_app.config.get('RATE_LIMIT_WINDOW', 60)

    with _rate_limit_lock:
        # Clean old requests outside the window
        recent = [
            (ts, ep) for ts, ep in RATE_LIMIT_REQUESTS.get(client_ip, [])
            if current_time - ts < window
        ]

        endpoint_requests = [ep for ts, ep in recent if ep == endpoint]
        if len(endpoint_requests) >= max_requests:
            RATE_LIMIT_REQUESTS[client_ip] = recent
            current_app.logger.warning(f"Rate limit exceeded for {client_ip} on {endpoint}")
            return False

        recent.append((current_time, endpoint))
        RATE_LIMIT_REQUESTS[client_ip] = recent
    return True


def reset_rate_limits():
    with _rate_limit_lock:
        RATE_LIMIT_REQUESTS.clear()


def hash_password(password):
    return generate_password_hash(password)


def verify_password(password, password_hash):
    """Verify password against hash"""
    if not password or not password_hash:
        return False
    return check_password_hash(password_hash, password)


def ensure_owner_account(app):
    """Create the owner account from OWNER_* settings if it does not exist"""
    from extensions import db
    from models import User, Profile

    username = app.config.get('OWNER_USERNAME')
    password = app.config.get('OWNER_PASSWORD')
    if not username or not password:
        app.logger.info('Owner credentials not configured, skipping owner account')
        return None

    owner = User.query.filter_by(username=username).first()
    if owner:
        return owner

    owner = User(
        username=username,
        email=app.config.get('OWNER_EMAIL') or f'{username}@localhost',
        password_hash=hash_password(password),
        role='owner'
    )
    db.session.add(owner)
    db.session.flush()
    db.session.add(Profile(id=owner.id, full_name=username, role='owner'))
    db.session.commit()
    app.logger.info(f"✓ Created owner account: {username}")
    return owner


__all__ = [
    'get_client_ip',
    'check_rate_limit',
    'reset_rate_limits',
    'hash_password',
    'verify_password',
    'ensure_owner_account'
]
