import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import WriteError
from models.patient_record import PatientRecord, STATUS_WAITING, STATUS_SERVED

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


# ------------------------------------------
# Add a patient to the queue
# ------------------------------------------
def add_patient(db: Session, name: str, age: int, severity: int, checkup: str) -> int:
    """Insert a waiting record and return its id.

    The store accepts any non-null name; callers validate input first.
    Raises WriteError if the insert fails.
    """
    record = PatientRecord(
        name=name,
        age=age,
        severity=severity,
        checkup=checkup,
        status=STATUS_WAITING,
    )

    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Insert failed: %s", e)
        raise WriteError(f"Could not add patient {name!r}: {e}") from e

    return record.id


# ------------------------------------------
# Waiting patients, most urgent first
# ------------------------------------------
def load_waiting(db: Session):
    try:
        return (
            db.query(PatientRecord)
            .filter(PatientRecord.status == STATUS_WAITING)
            .order_by(PatientRecord.severity.desc(), PatientRecord.id.asc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.error("Load waiting failed: %s", e)
        return []


# ------------------------------------------
# Mark a patient served
# ------------------------------------------
def mark_served(db: Session, record_id: int) -> bool:
    """Set status=served. Returns False if no record has that id."""
    try:
        record = db.query(PatientRecord).filter(PatientRecord.id == record_id).first()
        if not record:
            return False
        record.status = STATUS_SERVED
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Mark served failed for id %s: %s", record_id, e)
        return False
    return True


def claim_waiting(db: Session, record_id: int) -> bool:
    """Move a record from waiting to served in one UPDATE.

    Returns False if the record is missing or was already served, so two
    callers can never both claim the same patient.
    """
    try:
        updated = (
            db.query(PatientRecord)
            .filter(PatientRecord.id == record_id)
            .filter(PatientRecord.status == STATUS_WAITING)
            .update({PatientRecord.status: STATUS_SERVED}, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Claim failed for id %s: %s", record_id, e)
        return False
    return updated == 1


# ------------------------------------------
# Full visit history, newest first
# ------------------------------------------
def load_history(db: Session, limit: int | None = 0):
    """All records ordered by visit time, newest first.

    limit > 0 caps the number of rows; 0 or None returns everything.
    Same-second visits fall back to id so the latest insert still comes first.
    """
    try:
        q = db.query(PatientRecord).order_by(
            PatientRecord.visit_time.desc(), PatientRecord.id.desc()
        )
        if limit and limit > 0:
            q = q.limit(limit)
        return q.all()
    except SQLAlchemyError as e:
        logger.error("Load history failed: %s", e)
        return []


# ------------------------------------------
# Case-insensitive name search (Unicode casefold on both sides)
# ------------------------------------------
def _like_pattern(query: str) -> str:
    escaped = (
        query.casefold()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def search_by_name(db: Session, query: str):
    try:
        return (
            db.query(PatientRecord)
            .filter(
                func.casefold(PatientRecord.name).like(
                    _like_pattern(query or ""), escape=LIKE_ESCAPE
                )
            )
            .order_by(PatientRecord.visit_time.desc(), PatientRecord.id.desc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.error("Search failed for %r: %s", query, e)
        return []


# ------------------------------------------
# Single record / summary helpers
# ------------------------------------------
def get_patient(db: Session, record_id: int):
    return db.query(PatientRecord).filter(PatientRecord.id == record_id).first()


def count_by_status(db: Session) -> dict:
    """Return {status: count}; both statuses are always present."""
    counts = {STATUS_WAITING: 0, STATUS_SERVED: 0}
    try:
        rows = (
            db.query(PatientRecord.status, func.count(PatientRecord.id))
            .group_by(PatientRecord.status)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error("Count by status failed: %s", e)
        return counts
    for status, n in rows:
        counts[status] = n
    return counts
