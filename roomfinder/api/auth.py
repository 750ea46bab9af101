from datetime import datetime
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import create_access_token
from roomfinder import db, limiter
from roomfinder.models.user import User
from roomfinder.utils.decorators import identity_required
from roomfinder.utils.validators import validate_email, validate_password
from roomfinder.utils.sanitizers import sanitize_string

auth_bp = Blueprint('auth', __name__)


def issue_token(user):
    """Access token whose subject is the user's email"""
    return create_access_token(identity=user.email, additional_claims={'id': user.id})


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("10 per hour")
def register():
    """Register a new user"""
    try:
        data = request.get_json(silent=True) or {}

        # Sanitize inputs
        email = sanitize_string(data.get('email', '')).lower().strip()
        password = data.get('password', '')
        name = sanitize_string(data.get('name', '')).strip()
        avatar_url = sanitize_string(data.get('avatarUrl', '')) or None

        # Validation
        if not email or not password or not name:
            return jsonify({'message': 'All fields are required'}), 400

        if not validate_email(email):
            return jsonify({'message': 'Invalid email format'}), 400

        if not validate_password(password):
            return jsonify({'message': 'Password must be at least 8 characters long'}), 400

        # Check if email exists
        if User.query.filter_by(email=email).first():
            return jsonify({'message': 'Email already registered'}), 409

        user = User(email=email, name=name, avatar_url=avatar_url, role='user')
        user.set_password(password)

        db.session.add(user)
        db.session.commit()
        current_app.logger.info(f'Registered user {email}')

        return jsonify({
            'message': 'Registration successful',
            'token': issue_token(user),
            'user': user.to_dict()
        }), 201

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Registration failed: {str(e)}')
        return jsonify({'message': 'Registration failed', 'error': str(e)}), 500


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("20 per hour")
def login():
    """Login user"""
    try:
        data = request.get_json(silent=True) or {}

        email = sanitize_string(data.get('email', '')).lower().strip()
        password = data.get('password', '')

        if not email or not password:
            return jsonify({'message': 'Email and password are required'}), 400

        # Find user
        user = User.query.filter_by(email=email).first()

        if not user or not user.check_password(password):
            return jsonify({'message': 'Invalid email or password'}), 401

        if not user.is_active:
            return jsonify({'message': 'Account is deactivated'}), 403

        # Update last login
        user.last_login_at = datetime.utcnow()
        db.session.commit()

        return jsonify({
            'message': 'Login successful',
            'token': issue_token(user),
            'user': user.to_dict()
        }), 200

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Login failed: {str(e)}')
        return jsonify({'message': 'Login failed', 'error': str(e)}), 500


@auth_bp.route('/me', methods=['GET'])
@identity_required
def get_current_user(caller):
    """Get the current user's profile"""
    user = User.query.filter_by(email=caller.email).first()
    if not user:
        return jsonify({'message': 'User not found'}), 404
    return jsonify({'user': user.to_dict()}), 200
