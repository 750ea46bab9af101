from functools import wraps
from flask import jsonify
from roomfinder.models.user import User
from roomfinder.utils.identity import resolve_caller

def identity_required(fn):
    """Decorator to require a resolved caller, passed to the view as `caller`"""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        caller = resolve_caller()

        if caller is None:
            return jsonify({'message': 'Authentication required'}), 401

        return fn(*args, caller=caller, **kwargs)
    return wrapper

def identity_optional(fn):
    """Decorator passing the resolved caller, or None for anonymous requests"""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        return fn(*args, caller=resolve_caller(), **kwargs)
    return wrapper

def admin_required(fn):
    """Decorator to require an admin account"""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        caller = resolve_caller()

        if caller is None:
            return jsonify({'message': 'Authentication required'}), 401

        user = User.query.filter_by(email=caller.email).first()

        if not user:
            return jsonify({'message': 'User not found'}), 404

        if not user.is_admin():
            return jsonify({'message': 'Admin access required'}), 403

        return fn(*args, caller=caller, **kwargs)
    return wrapper
