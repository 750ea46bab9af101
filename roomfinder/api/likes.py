from flask import Blueprint, request, jsonify, current_app
from roomfinder import limiter
from roomfinder.errors import StorageFailure
from roomfinder.services.like_ledger import LikeLedger
from roomfinder.services.like_queries import LikeQueries
from roomfinder.utils.decorators import identity_required, identity_optional, admin_required

likes_bp = Blueprint('likes', __name__)

# Ledger and query errors (LikeError subclasses) propagate to the app-level
# handler, which maps them onto their status codes.


@likes_bp.route('/<room_id>/like', methods=['POST'])
@limiter.limit("30 per minute")
@identity_required
def like_room(room_id, caller):
    """Like a room as the current user"""
    like_count = LikeLedger().like(room_id, caller)
    return jsonify({
        'message': 'Room liked successfully',
        'likeCount': like_count,
        'hasLiked': True
    }), 200


@likes_bp.route('/<room_id>/like', methods=['DELETE'])
@limiter.limit("30 per minute")
@identity_required
def unlike_room(room_id, caller):
    """Remove the current user's like from a room"""
    like_count = LikeLedger().unlike(room_id, caller)
    return jsonify({
        'message': 'Room unliked successfully',
        'likeCount': like_count,
        'hasLiked': False
    }), 200


@likes_bp.route('/<room_id>/like/force', methods=['POST'])
@admin_required
def force_like_room(room_id, caller):
    """Record a like for a user without the duplicate pre-check (admin only)"""
    data = request.get_json(silent=True) or {}
    user_identity = data.get('userId') or data.get('email')
    if not user_identity:
        return jsonify({'message': 'userId is required'}), 400
    if not isinstance(user_identity, str):
        return jsonify({'message': 'userId must be a string'}), 400

    like_count = LikeLedger().force_like(room_id, user_identity)
    current_app.logger.warning(f'{caller.email} forced a like on room {room_id} for {user_identity}')
    return jsonify({
        'message': 'Room liked successfully',
        'likeCount': like_count,
        'hasLiked': True
    }), 200


@likes_bp.route('/<room_id>/like-status', methods=['GET'])
@identity_optional
def like_status(room_id, caller):
    """Whether the caller liked a room, with its current like count"""
    has_liked, like_count = LikeQueries().like_status(room_id, caller)
    return jsonify({'hasLiked': has_liked, 'likeCount': like_count}), 200


@likes_bp.route('/<room_id>/likes', methods=['GET'])
@identity_required
def room_likes(room_id, caller):
    """List users who liked a room, newest first"""
    try:
        rows = LikeQueries().liked_by(room_id)
    except StorageFailure as e:
        return jsonify({'message': 'Failed to fetch likes', 'error': e.message}), 500

    return jsonify([like.to_dict(user=user) for like, user in rows]), 200
