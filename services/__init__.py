from .patient_service import (
    add_patient,
    load_waiting,
    mark_served,
    load_history,
    search_by_name,
)
from .queue_service import PatientQueue

__all__ = [
    "add_patient",
    "load_waiting",
    "mark_served",
    "load_history",
    "search_by_name",
    "PatientQueue",
]
