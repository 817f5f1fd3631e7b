"""
Walk-in patient queue.

The store is the single source of truth. PatientQueue keeps a read-through
copy of the waiting list and drops it whenever it changes the store.
"""

import logging

from core.database import Database
from models.patient_record import STATUS_WAITING
from services.patient_service import (
    add_patient,
    claim_waiting,
    count_by_status,
    load_waiting,
    mark_served,
)

logger = logging.getLogger(__name__)

MIN_SEVERITY = 1
MAX_SEVERITY = 5


def validate_patient(name: str, age: int, severity: int):
    """Raise ValueError for input the queue does not accept."""
    if not (name or "").strip():
        raise ValueError("Name cannot be empty.")
    if not MIN_SEVERITY <= severity <= MAX_SEVERITY:
        raise ValueError(f"Severity must be between {MIN_SEVERITY} and {MAX_SEVERITY}.")
    if age < 0:
        raise ValueError("Age cannot be negative.")


class PatientQueue:
    def __init__(self, store: Database, avg_visit_minutes: int = 7):
        self.store = store
        self.avg_visit_minutes = avg_visit_minutes
        self._waiting = None

    def invalidate(self):
        self._waiting = None

    def waiting(self):
        """Waiting records, most urgent first, earliest arrival among equals."""
        if self._waiting is None:
            with self.store.session() as db:
                self._waiting = load_waiting(db)
        return self._waiting

    def __len__(self):
        return len(self.waiting())

    def admit(self, name: str, age: int, severity: int, checkup: str = "") -> int:
        validate_patient(name, age, severity)
        name = name.strip()
        with self.store.session() as db:
            try:
                record_id = add_patient(db, name, age, severity, (checkup or "").strip())
            finally:
                self.invalidate()
        logger.info("Admitted %s (id %s, severity %s)", name, record_id, severity)
        return record_id

    def serve(self, record_id: int) -> bool:
        with self.store.session() as db:
            served = mark_served(db, record_id)
        self.invalidate()
        return served

    def call_next(self):
        """Serve the head of the queue and return it, or None if empty.

        Reads the store fresh, since another session may have called
        patients since this cache was filled. A patient claimed elsewhere in
        the meantime is skipped in favour of the next one.
        """
        self.invalidate()
        try:
            for head in self.waiting():
                with self.store.session() as db:
                    claimed = claim_waiting(db, head.id)
                if claimed:
                    logger.info("Calling: %s (id %s)", head.name, head.id)
                    return head
                logger.info("Patient %s (id %s) already called, trying next", head.name, head.id)
        finally:
            self.invalidate()
        return None

    def summary(self) -> dict:
        """Waiting count from the same list the table shows, served from the store."""
        with self.store.session() as db:
            counts = count_by_status(db)
        counts[STATUS_WAITING] = len(self.waiting())
        return counts

    def filter(self, query: str = ""):
        """(position, record) pairs whose name contains query, any case.

        Positions index the whole queue so a filtered row keeps its place.
        """
        q = (query or "").strip().casefold()
        return [
            (i, p) for i, p in enumerate(self.waiting())
            if not q or q in (p.name or "").casefold()
        ]

    def estimated_wait(self, position: int) -> int:
        return position * self.avg_visit_minutes
