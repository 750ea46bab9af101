from .user import User
from .room import Room
from .room_like import RoomLike

__all__ = ['User', 'Room', 'RoomLike']
