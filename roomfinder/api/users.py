from flask import Blueprint, jsonify
from roomfinder.errors import IdentityMismatch
from roomfinder.models.room import Room
from roomfinder.services.like_queries import LikeQueries
from roomfinder.utils.decorators import identity_required

users_bp = Blueprint('users', __name__)


def ensure_self(caller, email):
    if caller.email != email.lower().strip():
        raise IdentityMismatch()


@users_bp.route('/likes/<email>', methods=['GET'])
@identity_required
def get_liked_rooms(email, caller):
    """Rooms the caller has liked, most recently liked first"""
    ensure_self(caller, email)

    rooms = LikeQueries().liked_listings(email)
    return jsonify([r.to_dict() for r in rooms]), 200


@users_bp.route('/rooms/<email>', methods=['GET'])
@identity_required
def get_my_rooms(email, caller):
    """Rooms owned by the caller"""
    ensure_self(caller, email)

    rooms = Room.owned_by(caller)
    return jsonify([r.to_dict() for r in rooms]), 200
