# models/patient_record.py

from sqlalchemy import Column, Integer, String, text
from core.database import Base

STATUS_WAITING = "waiting"
STATUS_SERVED = "served"


class PatientRecord(Base):
    __tablename__ = "patient_records"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String, nullable=False)
    age = Column(Integer)

    # Urgency score, 1 (low) to 5 (high)
    severity = Column(Integer)

    # Type of checkup (e.g. "General", "X-Ray")
    checkup = Column(String)

    # Stored as local-time text, filled in by SQLite at insert
    visit_time = Column(String, server_default=text("(datetime('now','localtime'))"))

    # waiting -> served, never back
    status = Column(String, server_default=text(f"'{STATUS_WAITING}'"))

    def __repr__(self):
        return f"<PatientRecord {self.id} - {self.name} ({self.status})>"
