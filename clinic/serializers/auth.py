from rest_framework import serializers

from clinic.models import Role, User
from clinic.services import users as user_service

from .fields import CleanCharField

PASSWORD_MIN_LENGTH = 8
PASSWORD_ERRORS = {'min_length': f'Password must be at least {PASSWORD_MIN_LENGTH} characters'}


class UserSerializer(serializers.ModelSerializer):
    """Public view of a user; the password hash never leaves the server."""
    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'firstName', 'lastName', 'email', 'role']
        read_only_fields = ['id', 'email', 'role']


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages={'invalid': 'Invalid email address'})
    password = serializers.CharField(
        min_length=PASSWORD_MIN_LENGTH, trim_whitespace=False, error_messages=PASSWORD_ERRORS
    )

    def validate_email(self, v):
        return v.strip().lower()


class RegisterSerializer(serializers.Serializer):
    firstName = CleanCharField(source='first_name', max_length=150)
    lastName = CleanCharField(source='last_name', max_length=150)
    email = serializers.EmailField(error_messages={'invalid': 'Invalid email address'})
    password = serializers.CharField(
        min_length=PASSWORD_MIN_LENGTH, trim_whitespace=False, error_messages=PASSWORD_ERRORS
    )
    confirmPassword = serializers.CharField(source='confirm_password', trim_whitespace=False)
    role = serializers.ChoiceField(choices=Role.choices, default=Role.RECEPTIONIST)

    def validate_email(self, v):
        v = v.strip().lower()
        if user_service.get_user_by_email(v) is not None:
            raise serializers.ValidationError('Email already exists')
        return v

    def validate_role(self, v):
        # Only an administrator may hand out the admin role.
        request = self.context.get('request')
        actor = getattr(request, 'user', None)
        if v == Role.ADMIN and getattr(actor, 'role', None) != Role.ADMIN:
            raise serializers.ValidationError('Only administrators can create admin accounts')
        return v

    def validate(self, attrs):
        if attrs['password'] != attrs.pop('confirm_password'):
            raise serializers.ValidationError({'confirmPassword': "Passwords don't match"})
        return attrs
