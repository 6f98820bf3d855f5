from typing import Optional

import structlog
from django.contrib.auth import get_user_model
from django.db import transaction

from clinic.models import Role
from clinic.services import in_id_range

User = get_user_model()
logger = structlog.get_logger(__name__)


def get_user(user_id: int) -> Optional[User]:
    if not in_id_range(user_id):
        return None
    return User.objects.filter(id=user_id).first()


def get_user_by_email(email: str) -> Optional[User]:
    return User.objects.filter(email__iexact=(email or '').strip()).first()


def list_users() -> list[User]:
    return list(User.objects.order_by('last_name', 'first_name', 'id'))


def create_user(*, first_name: str, last_name: str, email: str, password: str,
                role: str = Role.RECEPTIONIST) -> User:
    with transaction.atomic():
        user = User.objects.create_user(
            email=email, password=password, first_name=first_name, last_name=last_name, role=role,
        )
    logger.info('user.created', user_id=user.id, role=user.role)
    return user


def delete_user(user_id: int) -> bool:
    """Remove a user; their staff rows go with them."""
    if not in_id_range(user_id):
        return False
    with transaction.atomic():
        deleted, _ = User.objects.filter(id=user_id).delete()
    if deleted:
        logger.info('user.deleted', user_id=user_id)
    return deleted > 0
