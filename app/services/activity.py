"""Best-effort activity log writes and dashboard reads."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import ActivityLog

logger = logging.getLogger(__name__)


def log_activity(
    db: Session,
    user_id: int,
    action: str,
    entity_type: str,
    entity_id: int | None = None,
    details: str | None = None,
) -> ActivityLog | None:
    """
    Append an activity entry. Failures are rolled back and logged, never raised,
    so the primary operation (already committed) is unaffected.
    """
    entry = ActivityLog(
        user_id=user_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
    )
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Activity log write failed",
            extra={"user_id": user_id, "action": action, "entity_type": entity_type},
        )
        return None
    return entry


def recent_activity(db: Session, user_id: int, limit: int = 10) -> list[ActivityLog]:
    return (
        db.query(ActivityLog)
        .filter(ActivityLog.user_id == user_id)
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
        .limit(limit)
        .all()
    )
