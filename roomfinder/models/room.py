from datetime import datetime
from uuid import uuid4
from sqlalchemy import or_, func
from roomfinder import db


def _new_room_id():
    return uuid4().hex


class Room(db.Model):
    __tablename__ = 'rooms'

    # Legacy owner reference columns checked, in order, after owner_identity.
    # Older records were written with whichever of these the client sent;
    # new rooms always carry owner_identity.
    LEGACY_OWNER_FIELDS = ('user_id', 'owner_id', 'creator_id')

    id = db.Column(db.String(64), primary_key=True, default=_new_room_id)
    title = db.Column(db.String(255), nullable=False)
    location = db.Column(db.String(255), nullable=False, index=True)
    rent_amount = db.Column(db.Numeric(12, 2), nullable=False)
    description = db.Column(db.Text, nullable=True)
    room_type = db.Column(db.String(50), nullable=True)
    available = db.Column(db.Boolean, default=True)

    # Ownership
    owner_identity = db.Column(db.String(255), nullable=True, index=True)
    user_id = db.Column(db.String(255), nullable=True)
    owner_id = db.Column(db.String(255), nullable=True)
    creator_id = db.Column(db.String(255), nullable=True)
    owner = db.Column(db.JSON, nullable=True)
    owner_email = db.Column(db.String(255), nullable=True, index=True)

    # Statistics, written only through EngagementCounter
    like_count = db.Column(db.Integer, nullable=False, default=0)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=True)

    likes = db.relationship('RoomLike', backref='room', lazy='dynamic',
                            cascade='all, delete-orphan', passive_deletes=True)

    def owner_references(self):
        """Return every non-empty owner reference in priority order"""
        candidates = [self.owner_identity]
        candidates.extend(getattr(self, field) for field in self.LEGACY_OWNER_FIELDS)
        if isinstance(self.owner, dict):
            candidates.append(self.owner.get('id'))
        candidates.append(self.owner_email)
        references = []
        for value in candidates:
            if value in (None, ''):
                continue
            value = str(value).strip()
            # Emails compare case-insensitively, matching how callers are resolved
            references.append(value.lower() if '@' in value else value)
        return references

    def is_owned_by(self, caller):
        """Check if the caller matches any owner reference on this room"""
        if caller is None:
            return False
        identities = {caller.email.lower()}
        if caller.user_id is not None:
            identities.add(str(caller.user_id))
        return any(ref in identities for ref in self.owner_references())

    @classmethod
    def owned_by(cls, caller):
        """Rooms the caller owns through any owner reference, newest first"""
        identities = [caller.email.lower()]
        if caller.user_id is not None:
            identities.append(str(caller.user_id))

        columns = [cls.owner_identity, cls.owner_email]
        columns.extend(getattr(cls, field) for field in cls.LEGACY_OWNER_FIELDS)
        candidates = cls.query.filter(or_(
            *[func.lower(column).in_(identities) for column in columns],
            cls.owner.isnot(None),
        )).order_by(cls.created_at.desc()).all()

        # Narrow to the same rule is_owned_by applies, nested owner ids included
        return [room for room in candidates if room.is_owned_by(caller)]

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'location': self.location,
            'rentAmount': float(self.rent_amount) if self.rent_amount is not None else None,
            'description': self.description,
            'roomType': self.room_type,
            'available': self.available,
            'ownerEmail': self.owner_email or self.owner_identity,
            'likeCount': max(0, self.like_count or 0),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Room {self.title}>'
