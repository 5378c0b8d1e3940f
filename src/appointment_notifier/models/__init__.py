"""Domain models."""

from appointment_notifier.models.appointment import VisaAppointment

NotificationEvent = VisaAppointment

__all__ = ["NotificationEvent", "VisaAppointment"]
