"""
Unified error rendering for the API.

Every error leaves the API as ``{"message": ...}``; validation failures
add an ``errors`` list of ``{field, message}`` pairs and integrity
conflicts add a ``kind``.
"""
from __future__ import annotations

import structlog
from django.db import IntegrityError
from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.settings import api_settings
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)

CONFLICT = 'conflict'
REFERENCED_ENTITY_MISSING = 'referenced_entity_missing'
SCHEDULE_CONFLICT = 'schedule_conflict'


class IntegrityConflict(APIException):
    """A write collided with a database constraint or a scheduling rule."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'
    default_code = 'conflict'

    def __init__(self, detail=None, kind: str = CONFLICT):
        super().__init__(detail)
        self.kind = kind


class ScheduleConflict(Exception):
    """A booking lands within one slot of another live booking for the same staff member."""

    def __init__(self, overlapping_ids):
        super().__init__(f"overlaps appointments {list(overlapping_ids)}")
        self.overlapping_ids = list(overlapping_ids)


def conflict_from_db_error(exc: Exception) -> IntegrityConflict:
    """Classify an ORM integrity failure."""
    if isinstance(exc, ProtectedError):
        return IntegrityConflict('Record is still referenced by other records', kind=CONFLICT)
    text = str(exc).lower()
    if 'foreign key' in text:
        return IntegrityConflict('Referenced record does not exist', kind=REFERENCED_ENTITY_MISSING)
    return IntegrityConflict('Record conflicts with existing data', kind=CONFLICT)


def _field_errors(data, prefix: str = '') -> list[dict]:
    errors: list[dict] = []
    if isinstance(data, dict):
        for key, value in data.items():
            field = f'{prefix}.{key}' if prefix else str(key)
            errors.extend(_field_errors(value, field))
    elif isinstance(data, list):
        for item in data:
            if isinstance(item, (dict, list)):
                errors.extend(_field_errors(item, prefix))
            else:
                errors.append({'field': prefix or api_settings.NON_FIELD_ERRORS_KEY, 'message': str(item)})
    else:
        errors.append({'field': prefix or api_settings.NON_FIELD_ERRORS_KEY, 'message': str(data)})
    return errors


def api_exception_handler(exc, context):
    if isinstance(exc, (IntegrityError, ProtectedError)):
        exc = conflict_from_db_error(exc)
    elif isinstance(exc, ScheduleConflict):
        exc = IntegrityConflict(
            f"Staff member already has an appointment within this slot (ids: {exc.overlapping_ids})",
            kind=SCHEDULE_CONFLICT,
        )

    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('api.unhandled_error', view=type(context.get('view')).__name__)
        return Response({'message': 'Internal Server Error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ValidationError):
        body = {'message': 'Validation failed', 'errors': _field_errors(resp.data)}
    elif isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        body = {'message': 'Unauthorized'}
    elif isinstance(exc, PermissionDenied):
        body = {'message': 'Forbidden'}
    elif isinstance(exc, IntegrityConflict):
        body = {'message': str(exc.detail), 'kind': exc.kind}
    elif isinstance(resp.data, dict):
        body = {'message': str(resp.data.get('detail') or resp.data)}
    else:
        body = {'message': str(resp.data)}
    resp.data = body
    return resp
