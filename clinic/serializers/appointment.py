from rest_framework import serializers

from clinic.models import Appointment, AppointmentStatus, Patient, Staff

from .fields import CleanCharField, OptionalCharField, ReferenceField
from .patient import PatientSerializer
from .staff import StaffDetailSerializer


class AppointmentSerializer(serializers.ModelSerializer):
    """Create/update validator for an appointment.

    ``createdById`` is filled from the session on create and is never
    accepted from the request body.
    """
    patientId = ReferenceField(source='patient', queryset=Patient.objects.all())
    staffId = ReferenceField(source='staff', queryset=Staff.objects.all())
    scheduledFor = serializers.DateTimeField(source='scheduled_for')
    reason = CleanCharField()
    status = serializers.ChoiceField(choices=AppointmentStatus.choices, default=AppointmentStatus.PENDING)
    notes = OptionalCharField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    createdById = serializers.PrimaryKeyRelatedField(source='created_by', read_only=True)

    class Meta:
        model = Appointment
        fields = [
            'id', 'patientId', 'staffId', 'scheduledFor', 'reason', 'status', 'notes',
            'createdAt', 'createdById',
        ]
        read_only_fields = ['id']


class AppointmentDetailSerializer(AppointmentSerializer):
    """Appointment joined with its participants.

    Field ownership: top-level fields belong to the appointment,
    ``patient`` is the referenced patient and ``staff`` the referenced
    staff row with its own nested ``user``.
    """
    patient = PatientSerializer(read_only=True)
    staff = StaffDetailSerializer(read_only=True)

    class Meta(AppointmentSerializer.Meta):
        fields = AppointmentSerializer.Meta.fields + ['patient', 'staff']
