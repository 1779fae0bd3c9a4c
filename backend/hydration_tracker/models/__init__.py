from hydration_tracker.models.intake_record import IntakeRecord

__all__ = [
    "IntakeRecord",
]
