from typing import Optional

import structlog
from django.db import transaction
from django.db.models import QuerySet

from clinic.models import DEPARTMENT_SUGGESTIONS, Staff
from clinic.services import in_id_range

logger = structlog.get_logger(__name__)


def _with_user() -> QuerySet[Staff]:
    return Staff.objects.select_related('user')


def list_staff() -> list[Staff]:
    """All staff joined with their user, ordered by department."""
    return list(_with_user().order_by('department', 'id'))


def get_staff(staff_id: int) -> Optional[Staff]:
    if not in_id_range(staff_id):
        return None
    return _with_user().filter(id=staff_id).first()


def list_departments() -> list[str]:
    return list(DEPARTMENT_SUGGESTIONS)


def create_staff(**fields) -> Staff:
    """Insert a staff row, then read it back joined with its user.

    The two steps are not atomic; a failed read-back leaves the row in
    place and raises.
    """
    with transaction.atomic():
        created = Staff.objects.create(**fields)
    logger.info('staff.created', staff_id=created.id, user_id=created.user_id)
    staff = get_staff(created.id)
    if staff is None:
        raise RuntimeError('Failed to create staff')
    return staff


def update_staff(staff_id: int, **fields) -> Optional[Staff]:
    if not in_id_range(staff_id):
        return None
    qs = Staff.objects.filter(id=staff_id)
    with transaction.atomic():
        updated = qs.update(**fields) if fields else qs.count()
    if not updated:
        return None
    logger.info('staff.updated', staff_id=staff_id, fields=sorted(fields))
    return get_staff(staff_id)


def delete_staff(staff_id: int) -> bool:
    if not in_id_range(staff_id):
        return False
    with transaction.atomic():
        deleted, _ = Staff.objects.filter(id=staff_id).delete()
    if deleted:
        logger.info('staff.deleted', staff_id=staff_id)
    return deleted > 0
