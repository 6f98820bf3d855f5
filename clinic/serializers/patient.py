from rest_framework import serializers

from clinic.models import BloodGroup, Gender, Patient

from .fields import CleanCharField, OptionalCharField, OptionalEmailField


class PatientSerializer(serializers.ModelSerializer):
    """Create/update validator and wire shape of a patient record."""
    firstName = CleanCharField(source='first_name', max_length=100)
    lastName = CleanCharField(source='last_name', max_length=100)
    dateOfBirth = serializers.DateField(source='date_of_birth')
    gender = serializers.ChoiceField(choices=Gender.choices)
    email = OptionalEmailField()
    phone = CleanCharField(max_length=32)
    address = CleanCharField(max_length=255)
    city = CleanCharField(max_length=100)
    state = CleanCharField(max_length=100)
    zipCode = CleanCharField(source='zip_code', max_length=20)
    bloodGroup = serializers.ChoiceField(
        source='blood_group', choices=BloodGroup.choices, required=False, allow_null=True
    )
    medicalNotes = OptionalCharField(source='medical_notes')
    registeredAt = serializers.DateTimeField(source='registered_at', read_only=True)

    class Meta:
        model = Patient
        fields = [
            'id', 'firstName', 'lastName', 'dateOfBirth', 'gender', 'email', 'phone',
            'address', 'city', 'state', 'zipCode', 'bloodGroup', 'medicalNotes', 'registeredAt',
        ]
        read_only_fields = ['id']
