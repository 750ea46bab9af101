import logging
from sqlalchemy.exc import SQLAlchemyError
from roomfinder import db
from roomfinder.errors import StorageFailure
from roomfinder.models.room import Room
from roomfinder.models.room_like import RoomLike
from roomfinder.models.user import User
from roomfinder.services.engagement_counter import EngagementCounter

logger = logging.getLogger(__name__)


class LikeQueries:
    """Read-only views over the like ledger"""

    def __init__(self, counter=None):
        self.counter = counter or EngagementCounter()

    def like_status(self, room_id, caller=None):
        """Return (has_liked, like_count); a missing room reads as (False, 0)"""
        count = self.counter.current(room_id)
        if count is None:
            return False, 0
        if caller is None:
            return False, count

        try:
            has_liked = db.session.query(
                RoomLike.query.filter_by(room_id=room_id, user_identity=caller.email).exists()
            ).scalar()
        except SQLAlchemyError as e:
            logger.error(f'Like status lookup failed for room {room_id}: {str(e)}')
            raise StorageFailure() from e
        return bool(has_liked), count

    def liked_by(self, room_id):
        """Return ledger entries for a room, newest first, joined to user profiles.

        Entries whose user has no profile are kept with the profile left as None.
        """
        try:
            rows = (
                db.session.query(RoomLike, User)
                .outerjoin(User, User.email == RoomLike.user_identity)
                .filter(RoomLike.room_id == room_id)
                .order_by(RoomLike.created_at.desc(), RoomLike.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f'Likers lookup failed for room {room_id}: {str(e)}')
            raise StorageFailure() from e
        return rows

    def liked_listings(self, user_identity):
        """Return rooms the user liked, most recently liked first.

        Likes pointing at rooms that no longer exist drop out of the inner join.
        """
        try:
            return (
                Room.query
                .join(RoomLike, RoomLike.room_id == Room.id)
                .filter(RoomLike.user_identity == user_identity.lower().strip())
                .order_by(RoomLike.created_at.desc(), RoomLike.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f'Liked rooms lookup failed for {user_identity}: {str(e)}')
            raise StorageFailure() from e
