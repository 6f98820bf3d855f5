"""
Database models for the MediCare backend.

Four tables back the API: users (login identities with a role),
patients, staff (employment records owned by a user) and appointments
tying a patient to a staff member. Choice fields implement the
constrained value sets for role, gender, blood group and status.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class Role(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    DOCTOR = 'doctor', 'Doctor'
    NURSE = 'nurse', 'Nurse'
    RECEPTIONIST = 'receptionist', 'Receptionist'


class Gender(models.TextChoices):
    MALE = 'male', 'Male'
    FEMALE = 'female', 'Female'
    OTHER = 'other', 'Other'


class BloodGroup(models.TextChoices):
    A_POS = 'A+', 'A+'
    A_NEG = 'A-', 'A-'
    B_POS = 'B+', 'B+'
    B_NEG = 'B-', 'B-'
    AB_POS = 'AB+', 'AB+'
    AB_NEG = 'AB-', 'AB-'
    O_POS = 'O+', 'O+'
    O_NEG = 'O-', 'O-'


class AppointmentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    CONFIRMED = 'confirmed', 'Confirmed'
    IN_PROGRESS = 'in_progress', 'In progress'
    COMPLETED = 'completed', 'Completed'
    CANCELLED = 'cancelled', 'Cancelled'


# Offered by the staff form; the column itself is free text.
DEPARTMENT_SUGGESTIONS = [
    'Cardiology',
    'Neurology',
    'Pediatrics',
    'Orthopedics',
    'Oncology',
    'Radiology',
    'Emergency',
    'Nursing',
    'Administration',
]


class UserManager(BaseUserManager):
    """Manager for users identified by email instead of a username."""

    use_in_migrations = True

    @classmethod
    def normalize_email(cls, email):
        return (email or '').strip().lower()

    def get_by_natural_key(self, email):
        # Rows written around the manager may still carry mixed case.
        email = (email or '').strip()
        user = self.filter(email=email).first() or self.filter(email__iexact=email).order_by('id').first()
        if user is None:
            raise self.model.DoesNotExist(f"No user with email {email!r}")
        return user

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('email is required')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', Role.ADMIN)
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Login identity with one of the four clinic roles.

    The email address is the login identifier; Django's ``username``
    column is dropped. Role changes happen through the admin site or the
    ORM, never through the public API.
    """
    username = None
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.RECEPTIONIST)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    objects = UserManager()

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class Patient(models.Model):
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100, db_index=True)
    date_of_birth = models.DateField()
    gender = models.CharField(max_length=10, choices=Gender.choices)
    email = models.EmailField(null=True, blank=True)
    phone = models.CharField(max_length=32)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    zip_code = models.CharField(max_length=20)
    blood_group = models.CharField(max_length=3, choices=BloodGroup.choices, null=True, blank=True)
    medical_notes = models.TextField(null=True, blank=True)
    registered_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Staff(models.Model):
    """Employment record for a user. Deleting the user deletes this row."""
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='staff_profiles')
    department = models.CharField(max_length=100, db_index=True)
    specialization = models.CharField(max_length=255, null=True, blank=True)
    phone = models.CharField(max_length=32)
    address = models.CharField(max_length=255, null=True, blank=True)
    hire_date = models.DateField()
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name_plural = 'staff'

    def __str__(self) -> str:
        return f"{self.user.get_full_name()} ({self.department})"


class Appointment(models.Model):
    # Patients and staff with appointments cannot be removed underneath them.
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='appointments')
    staff = models.ForeignKey(Staff, on_delete=models.PROTECT, related_name='appointments')
    scheduled_for = models.DateTimeField(db_index=True)
    reason = models.TextField()
    status = models.CharField(
        max_length=20, choices=AppointmentStatus.choices, default=AppointmentStatus.PENDING
    )
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    created_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='appointments_created'
    )

    def __str__(self) -> str:
        return f"{self.patient_id} with {self.staff_id} at {self.scheduled_for:%Y-%m-%d %H:%M}"
