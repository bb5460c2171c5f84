from datetime import datetime
from flask import Blueprint, current_app
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy import or_

from vtube.errors import Conflict, InvalidArgument, Unauthorized
from vtube.models import db
from vtube.models_auth import User
from vtube.responses import api_response, request_data

auth_bp = Blueprint('auth', __name__, url_prefix='/api/v1/users')


@auth_bp.route('/register', methods=['POST'])
def register():
    data = request_data()
    username = (data.get('username') or '').strip()
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''
    full_name = (data.get('fullName') or '').strip()[:255] or None
    avatar = (data.get('avatar') or '').strip()[:500] or None

    # Validate username
    username_valid, username_errors = User.validate_username(username)
    if not username_valid:
        raise InvalidArgument(username_errors[0], username_errors)

    if not User.validate_email(email):
        raise InvalidArgument("A valid email is required")

    # Validate password
    password_valid, password_errors = User.validate_password(password)
    if not password_valid:
        raise InvalidArgument(password_errors[0], password_errors)

    # Check if username or email already exists
    existing_user = User.query.filter(
        or_(User.username == username, User.email == email)
    ).first()
    if existing_user:
        raise Conflict("User with this username or email already exists")

    user = User(username=username, email=email, full_name=full_name, avatar=avatar)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()

    current_app.logger.info(f"New user '{username}' registered successfully")
    return api_response(201, user.to_dict(), "User registered successfully")


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request_data()
    identifier = (data.get('username') or data.get('email') or '').strip()
    password = data.get('password') or ''

    if not identifier or not password:
        raise InvalidArgument("Username or email and password are required")

    user = User.query.filter(
        or_(User.username == identifier, User.email == identifier.lower())
    ).first()

    if user and user.check_password(password):
        user.last_login = datetime.utcnow()
        db.session.commit()
        login_user(user)
        current_app.logger.info(f"User '{user.username}' logged in successfully")
        return api_response(200, user.to_dict(), "User logged in successfully")

    current_app.logger.warning(f"Failed login attempt for '{identifier}'")
    raise Unauthorized("Invalid username or password")


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    username = current_user.username
    logout_user()
    current_app.logger.info(f"User '{username}' logged out")
    return api_response(200, {}, "User logged out")


@auth_bp.route('/current-user')
@login_required
def get_current_user():
    return api_response(200, current_user.to_dict(), "Current user fetched successfully")
