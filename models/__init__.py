from .patient_record import PatientRecord, STATUS_WAITING, STATUS_SERVED

__all__ = ["PatientRecord", "STATUS_WAITING", "STATUS_SERVED"]
