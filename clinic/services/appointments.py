"""
Appointment reads and writes.

Joined reads return appointments with ``patient`` and ``staff.user``
already loaded. "Today" is the calendar day of ``CLINIC_TIME_ZONE``,
half-open: ``[midnight, next midnight)``.
"""
from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

import structlog
from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from clinic.exceptions import ScheduleConflict
from clinic.models import Appointment, AppointmentStatus
from clinic.services import in_id_range

logger = structlog.get_logger(__name__)

ALLOW = 'allow'
WARN = 'warn'
REJECT = 'reject'


def _with_participants() -> QuerySet[Appointment]:
    return Appointment.objects.select_related('patient', 'staff__user')


def list_appointments() -> list[Appointment]:
    return list(_with_participants().order_by('-scheduled_for', '-id'))


def get_appointment(appointment_id: int) -> Optional[Appointment]:
    if not in_id_range(appointment_id):
        return None
    return _with_participants().filter(id=appointment_id).first()


def day_bounds(now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """Local midnight of ``now``'s day and the following midnight."""
    tz = ZoneInfo(settings.CLINIC_TIME_ZONE)
    today = timezone.localtime(now or timezone.now(), tz).date()
    start = datetime.combine(today, time.min, tzinfo=tz)
    end = datetime.combine(today + timedelta(days=1), time.min, tzinfo=tz)
    return start, end


def todays_appointments(now: Optional[datetime] = None) -> list[Appointment]:
    start, end = day_bounds(now)
    qs = _with_participants().filter(scheduled_for__gte=start, scheduled_for__lt=end)
    return list(qs.order_by('scheduled_for', 'id'))


def find_overlaps(staff_id: int, scheduled_for: datetime, *, exclude_id: Optional[int] = None) -> list[int]:
    """Ids of live appointments of ``staff_id`` starting less than one slot away."""
    slot = timedelta(minutes=settings.APPOINTMENT_SLOT_MINUTES)
    qs = (
        Appointment.objects
        .filter(staff_id=staff_id, scheduled_for__gt=scheduled_for - slot, scheduled_for__lt=scheduled_for + slot)
        .exclude(status=AppointmentStatus.CANCELLED)
    )
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    return list(qs.order_by('scheduled_for', 'id').values_list('id', flat=True))


def check_schedule(staff_id: int, scheduled_for: datetime, *, status: Optional[str] = None,
                   exclude_id: Optional[int] = None) -> list[int]:
    """Apply ``APPOINTMENT_OVERLAP_POLICY`` to a prospective booking.

    Returns the overlapping ids (empty under ``allow``). Under ``reject``
    any overlap raises :class:`ScheduleConflict`. Cancelled bookings never
    conflict.
    """
    policy = settings.APPOINTMENT_OVERLAP_POLICY
    if policy == ALLOW or status == AppointmentStatus.CANCELLED:
        return []
    overlaps = find_overlaps(staff_id, scheduled_for, exclude_id=exclude_id)
    if not overlaps:
        return []
    if policy == REJECT:
        logger.info('appointment.overlap_rejected', staff_id=staff_id, overlapping=overlaps)
        raise ScheduleConflict(overlaps)
    logger.warning('appointment.overlap', staff_id=staff_id, scheduled_for=scheduled_for.isoformat(),
                   overlapping=overlaps)
    return overlaps


def create_appointment(*, created_by=None, **fields) -> Appointment:
    with transaction.atomic():
        appointment = Appointment.objects.create(created_by=created_by, **fields)
    logger.info('appointment.created', appointment_id=appointment.id,
                patient_id=appointment.patient_id, staff_id=appointment.staff_id)
    return appointment


def update_appointment(appointment_id: int, **fields) -> Optional[Appointment]:
    """Partial update. The creator and creation time are never rewritten."""
    fields.pop('created_by', None)
    fields.pop('created_at', None)
    if not in_id_range(appointment_id):
        return None
    qs = Appointment.objects.filter(id=appointment_id)
    with transaction.atomic():
        updated = qs.update(**fields) if fields else qs.count()
    if not updated:
        return None
    logger.info('appointment.updated', appointment_id=appointment_id, fields=sorted(fields))
    return Appointment.objects.get(id=appointment_id)


def delete_appointment(appointment_id: int) -> bool:
    if not in_id_range(appointment_id):
        return False
    with transaction.atomic():
        deleted, _ = Appointment.objects.filter(id=appointment_id).delete()
    if deleted:
        logger.info('appointment.deleted', appointment_id=appointment_id)
    return deleted > 0
