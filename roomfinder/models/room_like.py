from roomfinder import db
from datetime import datetime

class RoomLike(db.Model):
    __tablename__ = 'room_likes'

    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.String(64), db.ForeignKey('rooms.id', ondelete='CASCADE'), nullable=False, index=True)
    user_identity = db.Column(db.String(255), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Ensure a user can only like a room once
    __table_args__ = (db.UniqueConstraint('room_id', 'user_identity', name='uq_room_user_like'),)

    def to_dict(self, user=None):
        data = {
            'userId': self.user_identity,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
        if user is not None:
            data['userDetails'] = user.to_profile()
        return data

    def __repr__(self):
        return f'<RoomLike {self.user_identity} -> {self.room_id}>'
