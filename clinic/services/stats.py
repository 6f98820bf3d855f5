from django.conf import settings

from clinic.models import Appointment, Patient, Staff


def clinic_stats() -> dict:
    """Row counts for the dashboard plus the bed occupancy placeholder."""
    return {
        'patientCount': Patient.objects.count(),
        'staffCount': Staff.objects.count(),
        'appointmentCount': Appointment.objects.count(),
        'bedOccupancy': settings.CLINIC_BED_OCCUPANCY_PLACEHOLDER,
    }
