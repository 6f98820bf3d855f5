"""
Django admin registrations for the clinic models.

Superusers can inspect and correct records through ``/admin/``.
"""
from django.contrib import admin

from .models import Appointment, Patient, Staff, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    # Passwords are set with `manage.py changepassword`, never edited as raw hashes here.
    exclude = ('password',)
    ordering = ('email',)
    list_display = ('email', 'first_name', 'last_name', 'role', 'is_active', 'is_superuser')
    list_filter = ('role', 'is_active')
    search_fields = ('email', 'first_name', 'last_name')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'last_name', 'first_name', 'date_of_birth', 'gender', 'phone', 'registered_at')
    list_filter = ('gender', 'blood_group')
    search_fields = ('first_name', 'last_name', 'phone', 'email')


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'department', 'specialization', 'hire_date', 'is_active')
    list_filter = ('department', 'is_active')
    search_fields = ('user__email', 'user__last_name', 'department', 'specialization')
    list_select_related = ('user',)


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'scheduled_for', 'patient', 'staff', 'status', 'created_by')
    list_filter = ('status',)
    search_fields = ('patient__last_name', 'staff__user__last_name', 'reason')
    date_hierarchy = 'scheduled_for'
    list_select_related = ('patient', 'staff__user', 'created_by')
