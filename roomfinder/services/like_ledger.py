import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from roomfinder import db
from roomfinder.errors import Unauthenticated, Forbidden, NotFound, Conflict, StorageFailure
from roomfinder.models.room import Room
from roomfinder.models.room_like import RoomLike
from roomfinder.services.engagement_counter import EngagementCounter
from roomfinder.utils.identity import Caller

logger = logging.getLogger(__name__)


class LikeLedger:
    """Owns the lifecycle of RoomLike entries.

    Every successful mutation is committed to the ledger first and then
    mirrored onto the room's counter through the EngagementCounter. The two
    steps are separate commits: if the counter step fails the ledger entry
    stays, and `EngagementCounter.reconcile` is the repair path.
    """

    def __init__(self, counter=None):
        self.counter = counter or EngagementCounter()

    def like(self, room_id, caller):
        """Record that caller likes the room and return the new like count"""
        room = self._load_for(room_id, caller, action='like')

        if self._find(room.id, caller.email) is not None:
            raise Conflict('You have already liked this room')

        return self._insert(room.id, caller.email)

    def force_like(self, room_id, user_identity):
        """Insert a like without the duplicate pre-check.

        Only the storage level unique constraint stands between this call and
        a second entry for the same pair, so it is the path that exercises
        that constraint directly. Self-likes are still refused.
        """
        if not isinstance(user_identity, str) or not user_identity.strip():
            raise Unauthenticated('A user identity is required')
        user_identity = user_identity.lower().strip()
        room = self._get_room(room_id)
        if room.is_owned_by(Caller(email=user_identity, user_id=None)):
            raise Forbidden('You cannot like your own room')

        logger.warning(f'Forced like on room {room_id} for {user_identity}')
        return self._insert(room.id, user_identity)

    def unlike(self, room_id, caller):
        """Remove caller's like from the room and return the new like count"""
        self._load_for(room_id, caller, action='unlike')

        try:
            deleted = RoomLike.query.filter_by(
                room_id=room_id, user_identity=caller.email
            ).delete(synchronize_session=False)
            if not deleted:
                db.session.rollback()
                raise Conflict('You have not liked this room yet')
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f'Unlike failed for room {room_id}: {str(e)}')
            raise StorageFailure() from e

        count = self.counter.apply_delta(room_id, -1)
        logger.info(f'{caller.email} unliked room {room_id} (likes={count})')
        return count

    def purge(self, room_id):
        """Delete every ledger entry for a room, returning how many went"""
        try:
            removed = RoomLike.query.filter_by(room_id=room_id).delete(synchronize_session=False)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f'Purging likes for room {room_id} failed: {str(e)}')
            raise StorageFailure() from e
        if removed:
            logger.info(f'Purged {removed} likes for room {room_id}')
        return removed

    def _insert(self, room_id, user_identity):
        try:
            db.session.add(RoomLike(room_id=room_id, user_identity=user_identity))
            db.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent like for the same pair
            db.session.rollback()
            raise Conflict('You have already liked this room')
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f'Like insert failed for room {room_id}: {str(e)}')
            raise StorageFailure() from e

        count = self.counter.apply_delta(room_id, 1)
        logger.info(f'{user_identity} liked room {room_id} (likes={count})')
        return count

    def _load_for(self, room_id, caller, action):
        if caller is None:
            raise Unauthenticated()
        room = self._get_room(room_id)
        if room.is_owned_by(caller):
            raise Forbidden(f'You cannot {action} your own room')
        return room

    def _get_room(self, room_id):
        try:
            room = db.session.get(Room, room_id)
        except SQLAlchemyError as e:
            logger.error(f'Room lookup failed for {room_id}: {str(e)}')
            raise StorageFailure() from e
        if room is None:
            raise NotFound()
        return room

    def _find(self, room_id, user_identity):
        try:
            return RoomLike.query.filter_by(room_id=room_id, user_identity=user_identity).first()
        except SQLAlchemyError as e:
            logger.error(f'Like lookup failed for room {room_id}: {str(e)}')
            raise StorageFailure() from e

