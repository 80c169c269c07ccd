"""
Auth Routes - Authentication and session status
"""

from flask import request, jsonify, current_app
from flask_login import login_user, logout_user
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import User, Profile
from utils.auth import get_auth_status, set_auth_status, clear_auth_status
from utils.data import user_to_dict
from utils.decorators import login_required
from utils.helpers import get_form_data, clean_fields, missing_fields
from utils.security import get_client_ip, hash_password, verify_password
from . import auth_bp


MIN_PASSWORD_LENGTH = 8


@auth_bp.route('/register', methods=['POST'])
def register():
    """Client account registration"""
    form = get_form_data()
    data = clean_fields(form, ['username', 'email', 'full_name'], max_length=255)
    password = form.get('password') or ''

    missing = missing_fields(dict(data, password=password), ['username', 'email', 'password'])
    if missing:
        return jsonify({'success': False, 'message': 'Required fields missing.',
                        'missing': missing}), 400

    if len(password) < MIN_PASSWORD_LENGTH:
        return jsonify({'success': False,
                        'message': f'Password must be at least {MIN_PASSWORD_LENGTH} characters.'}), 400

    existing = User.query.filter(
        db.or_(User.username == data['username'], User.email == data['email'])
    ).first()
    if existing:
        return jsonify({'success': False, 'message': 'Username or email already registered.'}), 409

    try:
        user = User(
            username=data['username'],
            email=data['email'],
            password_hash=hash_password(password),
            role='client'
        )
        db.session.add(user)
        db.session.flush()
        db.session.add(Profile(id=user.id, full_name=data['full_name'] or data['username'],
                               role='client'))
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Registration failed for {data['username']}: {str(e)}")
        return jsonify({'success': False, 'message': 'Registration failed. Please try again.'}), 500

    login_user(user)
    set_auth_status(user)
    current_app.logger.info(f"Registered client {user.username} from {get_client_ip()}")
    return jsonify({'success': True, 'user': user_to_dict(user),
                    'auth': get_auth_status().to_dict()}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Owner and client login"""
    form = get_form_data()
    identifier = str(form.get('username', '')).strip()
    password = form.get('password') or ''

    user = User.query.filter(
        db.or_(User.username == identifier, User.email == identifier)
    ).first() if identifier else None

    if not user or not user.is_active or not verify_password(password, user.password_hash):
        current_app.logger.warning(f"Failed login for {identifier!r} from {get_client_ip()}")
        return jsonify({'success': False, 'message': 'Invalid credentials. Please try again.'}), 401

    login_user(user, remember=str(form.get('remember', '')).lower() in ('1', 'true', 'on'))
    set_auth_status(user)
    current_app.logger.info(f"User login: {user.username}")
    return jsonify({'success': True, 'message': f'Welcome back, {user.username}!',
                    'user': user_to_dict(user), 'auth': get_auth_status().to_dict()})


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Logout current user"""
    username = get_auth_status().username
    logout_user()
    clear_auth_status()
    current_app.logger.info(f"User logout: {username}")
    return jsonify({'success': True, 'message': 'Logged out successfully',
                    'auth': get_auth_status().to_dict()})


@auth_bp.route('/status')
def status():
    return jsonify(get_auth_status().to_dict())
