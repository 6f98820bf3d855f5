from rest_framework import serializers

from clinic.models import Staff, User

from .auth import UserSerializer
from .fields import CleanCharField, OptionalCharField, ReferenceField


class StaffSerializer(serializers.ModelSerializer):
    """Create/update validator for a staff record.

    ``userId`` must point at an existing user; creating staff never
    creates the underlying account.
    """
    userId = ReferenceField(source='user', queryset=User.objects.all())
    department = CleanCharField(max_length=100)
    specialization = OptionalCharField(max_length=255)
    phone = CleanCharField(max_length=32)
    address = OptionalCharField(max_length=255)
    hireDate = serializers.DateField(source='hire_date')
    isActive = serializers.BooleanField(source='is_active', default=True)

    class Meta:
        model = Staff
        fields = ['id', 'userId', 'department', 'specialization', 'phone', 'address', 'hireDate', 'isActive']
        read_only_fields = ['id']


class StaffDetailSerializer(StaffSerializer):
    """Staff row joined with its owning user.

    Field ownership: every top-level field belongs to the staff row,
    ``user`` is the referenced user record.
    """
    user = UserSerializer(read_only=True)

    class Meta(StaffSerializer.Meta):
        fields = StaffSerializer.Meta.fields + ['user']
