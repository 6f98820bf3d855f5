from typing import Optional

import structlog
from django.db import transaction

from clinic.models import Patient
from clinic.services import in_id_range

logger = structlog.get_logger(__name__)


def list_patients() -> list[Patient]:
    return list(Patient.objects.order_by('last_name', 'first_name', 'id'))


def get_patient(patient_id: int) -> Optional[Patient]:
    if not in_id_range(patient_id):
        return None
    return Patient.objects.filter(id=patient_id).first()


def create_patient(**fields) -> Patient:
    with transaction.atomic():
        patient = Patient.objects.create(**fields)
    logger.info('patient.created', patient_id=patient.id)
    return patient


def update_patient(patient_id: int, **fields) -> Optional[Patient]:
    """Apply ``fields`` to the patient; ``None`` when no such patient exists.

    ``registered_at`` is never written here.
    """
    fields.pop('registered_at', None)
    if not in_id_range(patient_id):
        return None
    qs = Patient.objects.filter(id=patient_id)
    with transaction.atomic():
        updated = qs.update(**fields) if fields else qs.count()
    if not updated:
        return None
    logger.info('patient.updated', patient_id=patient_id, fields=sorted(fields))
    return get_patient(patient_id)


def delete_patient(patient_id: int) -> bool:
    if not in_id_range(patient_id):
        return False
    # Raises ProtectedError while appointments still reference the patient.
    with transaction.atomic():
        deleted, _ = Patient.objects.filter(id=patient_id).delete()
    if deleted:
        logger.info('patient.deleted', patient_id=patient_id)
    return deleted > 0
