"""
Role based capability checks.

Each role holds a set of ``<resource>.<action>`` capabilities. Views
declare the resource they serve through a policy class; the action is
derived from the HTTP method. With ``CLINIC_ENFORCE_ROLE_POLICY`` off any
authenticated user passes, which matches the old client-only gating.
"""
from django.conf import settings
from rest_framework.permissions import BasePermission, SAFE_METHODS

from .models import Role

VIEW = 'view'
CHANGE = 'change'
DELETE = 'delete'

_STAFF_ROLE_CAPABILITIES = frozenset({
    'patients.view', 'patients.change',
    'staff.view',
    'appointments.view', 'appointments.change',
})

ROLE_CAPABILITIES: dict[str, frozenset[str]] = {
    Role.ADMIN: frozenset({
        f'{resource}.{action}'
        for resource in ('patients', 'staff', 'appointments', 'users')
        for action in (VIEW, CHANGE, DELETE)
    }),
    Role.DOCTOR: _STAFF_ROLE_CAPABILITIES,
    Role.NURSE: _STAFF_ROLE_CAPABILITIES,
    Role.RECEPTIONIST: _STAFF_ROLE_CAPABILITIES,
}


def action_for_method(method: str) -> str:
    if method in SAFE_METHODS:
        return VIEW
    if method == 'DELETE':
        return DELETE
    return CHANGE


def role_can(role: str | None, capability: str) -> bool:
    return capability in ROLE_CAPABILITIES.get(role or '', frozenset())


class ResourcePolicy(BasePermission):
    """Require the capability matching ``resource`` and the request method."""
    resource: str = ''

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        if not settings.CLINIC_ENFORCE_ROLE_POLICY:
            return True
        return role_can(getattr(user, "role", None), f'{self.resource}.{action_for_method(request.method)}')


class PatientPolicy(ResourcePolicy):
    resource = 'patients'


class StaffPolicy(ResourcePolicy):
    resource = 'staff'


class AppointmentPolicy(ResourcePolicy):
    resource = 'appointments'


class UserDirectoryPolicy(ResourcePolicy):
    resource = 'users'
