from datetime import datetime
from decimal import Decimal, InvalidOperation
from flask import Blueprint, request, jsonify, current_app
from roomfinder import db
from roomfinder.models.room import Room
from roomfinder.services.like_ledger import LikeLedger
from roomfinder.utils.decorators import identity_required
from roomfinder.utils.sanitizers import sanitize_string

rooms_bp = Blueprint('rooms', __name__)


def parse_rent(value):
    """Coerce a rent amount to Decimal, None if it is not a non-negative number"""
    if value is None or str(value).strip() == '':
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def parse_available(value):
    """Read an availability flag, None if it is not a recognised boolean"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ('true', '1', 'yes'):
            return True
        if lowered in ('false', '0', 'no'):
            return False
    return None


@rooms_bp.route('/', methods=['GET'], strict_slashes=False)
def get_rooms():
    """Get all rooms, newest first"""
    try:
        rooms = Room.query.order_by(Room.created_at.desc()).all()
        return jsonify([r.to_dict() for r in rooms]), 200

    except Exception as e:
        current_app.logger.error(f'Failed to fetch rooms: {str(e)}')
        return jsonify({'message': 'Failed to fetch rooms', 'error': str(e)}), 500


@rooms_bp.route('/<room_id>', methods=['GET'])
def get_room(room_id):
    """Get a single room by ID"""
    room = db.session.get(Room, room_id)
    if room is None:
        return jsonify({'message': 'Room not found'}), 404
    return jsonify(room.to_dict()), 200


@rooms_bp.route('/', methods=['POST'], strict_slashes=False)
@identity_required
def create_room(caller):
    """Create a new room listing owned by the caller"""
    try:
        data = request.get_json(silent=True) or {}

        title = sanitize_string(data.get('title', ''))
        location = sanitize_string(data.get('location', ''))
        rent_raw = data.get('rentAmount', data.get('rent_amount'))

        if not title or not location or rent_raw in (None, ''):
            return jsonify({'message': 'Title, location and rent amount are required'}), 400

        rent_amount = parse_rent(rent_raw)
        if rent_amount is None:
            return jsonify({'message': 'Rent amount must be a non-negative number'}), 400

        available = parse_available(data.get('available', True))
        if available is None:
            return jsonify({'message': 'Available must be true or false'}), 400

        room = Room(
            title=title,
            location=location,
            rent_amount=rent_amount,
            description=sanitize_string(data.get('description', '')) or None,
            room_type=sanitize_string(data.get('roomType') or data.get('room_type') or '') or None,
            available=available,
            owner_identity=caller.email,
            owner_email=caller.email,
            user_id=str(caller.user_id) if caller.user_id is not None else None,
            like_count=0,
        )

        db.session.add(room)
        db.session.commit()
        current_app.logger.info(f'{caller.email} created room {room.id}')

        return jsonify({
            'message': 'Room created successfully',
            'room': room.to_dict()
        }), 201

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to create room: {str(e)}')
        return jsonify({'message': 'Failed to create room', 'error': str(e)}), 500


@rooms_bp.route('/<room_id>', methods=['PUT'])
@identity_required
def update_room(room_id, caller):
    """Update a room listing"""
    try:
        room = db.session.get(Room, room_id)
        if room is None:
            return jsonify({'message': 'Room not found'}), 404

        # Check permissions
        if not room.is_owned_by(caller):
            return jsonify({'message': 'Permission denied'}), 403

        data = request.get_json(silent=True) or {}

        # Update fields
        if 'title' in data:
            title = sanitize_string(data['title'])
            if not title:
                return jsonify({'message': 'Title cannot be empty'}), 400
            room.title = title
        if 'location' in data:
            location = sanitize_string(data['location'])
            if not location:
                return jsonify({'message': 'Location cannot be empty'}), 400
            room.location = location
        if 'rentAmount' in data or 'rent_amount' in data:
            rent_amount = parse_rent(data.get('rentAmount', data.get('rent_amount')))
            if rent_amount is None:
                return jsonify({'message': 'Rent amount must be a non-negative number'}), 400
            room.rent_amount = rent_amount
        if 'description' in data:
            room.description = sanitize_string(data['description']) or None
        if 'roomType' in data:
            room.room_type = sanitize_string(data['roomType']) or None
        if 'available' in data:
            available = parse_available(data['available'])
            if available is None:
                return jsonify({'message': 'Available must be true or false'}), 400
            room.available = available

        room.updated_at = datetime.utcnow()
        db.session.commit()

        return jsonify({
            'message': 'Room updated successfully',
            'room': room.to_dict()
        }), 200

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to update room {room_id}: {str(e)}')
        return jsonify({'message': 'Failed to update room', 'error': str(e)}), 500


@rooms_bp.route('/<room_id>', methods=['DELETE'])
@identity_required
def delete_room(room_id, caller):
    """Delete a room listing together with its likes"""
    try:
        room = db.session.get(Room, room_id)
        if room is None:
            return jsonify({'message': 'Room not found'}), 404

        # Check permissions
        if not room.is_owned_by(caller):
            return jsonify({'message': 'Permission denied'}), 403

        removed = LikeLedger().purge(room_id)
        db.session.delete(room)
        db.session.commit()
        current_app.logger.info(f'{caller.email} deleted room {room_id} ({removed} likes removed)')

        return jsonify({'message': 'Room deleted successfully', 'deletedLikes': removed}), 200

    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to delete room {room_id}: {str(e)}')
        return jsonify({'message': 'Failed to delete room', 'error': str(e)}), 500
