"""
URL mappings for the clinic API.

Paths carry no trailing slash; the browser client calls them exactly as
written here.
"""
from django.urls import path, include

from .views import appointments, health, patients, staff, stats
from .views.auth import current_user_view, login_view, logout_view, register_view, users_view


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Authentication
    path('api/register', register_view),
    path('api/login', login_view),
    path('api/logout', logout_view),
    path('api/user', current_user_view),
    path('api/users', users_view),
    # Patients
    path('api/patients', patients.patients),
    path('api/patients/<int:pk>', patients.patient_detail),
    # Staff
    path('api/staff', staff.staff_collection),
    path('api/staff/departments', staff.staff_departments),
    path('api/staff/<int:pk>', staff.staff_detail),
    # Appointments
    path('api/appointments', appointments.appointments),
    path('api/appointments/today', appointments.appointments_today),
    path('api/appointments/<int:pk>', appointments.appointment_detail),
    # Dashboard
    path('api/stats', stats.stats),
]
