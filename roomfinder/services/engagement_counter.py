import logging
from sqlalchemy import update, select, func
from sqlalchemy.exc import SQLAlchemyError
from roomfinder import db
from roomfinder.errors import NotFound, StorageFailure
from roomfinder.models.room import Room
from roomfinder.models.room_like import RoomLike

logger = logging.getLogger(__name__)


class EngagementCounter:
    """Keeps rooms.like_count in step with the like ledger.

    The counter is only ever moved by a signed delta applied inside the
    UPDATE statement itself, so concurrent likes on the same room add up
    correctly without any application level read-modify-write.
    """

    def apply_delta(self, room_id, delta):
        """Add delta to the room's like counter and return the new value, floored at 0"""
        try:
            result = db.session.execute(
                update(Room)
                .where(Room.id == room_id)
                .values(like_count=Room.like_count + delta)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.session.rollback()
                logger.warning(f'Room {room_id} vanished before its like counter could move by {delta}')
                raise NotFound()

            count = db.session.execute(
                select(Room.like_count).where(Room.id == room_id)
            ).scalar_one()
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f'Like counter update failed for room {room_id}: {str(e)}')
            raise StorageFailure() from e

        if count < 0:
            logger.warning(f'Room {room_id} has a negative like counter ({count})')
        return max(0, count)

    def current(self, room_id):
        """Return the room's like counter, or None when the room does not exist"""
        try:
            count = db.session.execute(
                select(Room.like_count).where(Room.id == room_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f'Like counter read failed for room {room_id}: {str(e)}')
            raise StorageFailure() from e
        if count is None:
            return None
        return max(0, count)

    def reconcile(self, room_id=None):
        """Recompute counters from ledger counts.

        Returns a list of (room_id, old_count, new_count) for every room
        whose stored counter had drifted.
        """
        ledger_counts = (
            select(RoomLike.room_id, func.count(RoomLike.id).label('total'))
            .group_by(RoomLike.room_id)
            .subquery()
        )
        query = (
            select(Room.id, Room.like_count, func.coalesce(ledger_counts.c.total, 0))
            .outerjoin(ledger_counts, ledger_counts.c.room_id == Room.id)
        )
        if room_id is not None:
            query = query.where(Room.id == room_id)

        corrections = []
        try:
            for rid, stored, actual in db.session.execute(query).all():
                if stored == actual:
                    continue
                # Absolute write is limited to this repair path
                db.session.execute(
                    update(Room)
                    .where(Room.id == rid)
                    .values(like_count=actual)
                    .execution_options(synchronize_session=False)
                )
                corrections.append((rid, stored, actual))
                logger.info(f'Reconciled like counter for room {rid}: {stored} -> {actual}')
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f'Like counter reconciliation failed: {str(e)}')
            raise StorageFailure() from e

        return corrections
