import itertools
from datetime import date

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from clinic.models import Appointment, Patient, Role, Staff, User

PASSWORD = 'Sup3rSecret!'

PATIENT_PAYLOAD = {
    'firstName': 'John',
    'lastName': 'Doe',
    'dateOfBirth': '1980-01-01',
    'gender': 'male',
    'phone': '555-1234',
    'address': '1 Main St',
    'city': 'Springfield',
    'state': 'IL',
    'zipCode': '62701',
}

_seq = itertools.count(1)


@pytest.fixture(autouse=True)
def _fresh_cache():
    # Throttle counters live in the default cache.
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    def make(role=Role.RECEPTIONIST, email=None, **extra):
        n = next(_seq)
        return User.objects.create_user(
            email=email or f'{role}{n}@example.com',
            password=PASSWORD,
            first_name=extra.pop('first_name', f'First{n}'),
            last_name=extra.pop('last_name', f'Last{n}'),
            role=role,
            **extra,
        )
    return make


@pytest.fixture
def client_for(make_user):
    """APIClient holding a live session for a new user of ``role``."""
    def make(role):
        user = make_user(role=role)
        c = APIClient()
        c.force_login(user)
        c.user = user
        return c
    return make


@pytest.fixture
def admin_client(client_for):
    return client_for(Role.ADMIN)


@pytest.fixture
def make_patient(db):
    def make(**fields):
        n = next(_seq)
        row = dict(
            first_name=f'Pat{n}', last_name=f'Ient{n}', date_of_birth=date(1990, 1, 1), gender='female',
            phone='555-0000', address='2 Side St', city='Springfield', state='IL', zip_code='62701',
        )
        row.update(fields)
        return Patient.objects.create(**row)
    return make


@pytest.fixture
def make_staff(make_user):
    def make(user=None, **fields):
        row = dict(department='Cardiology', phone='555-0001', hire_date=date(2020, 1, 1))
        row.update(fields)
        return Staff.objects.create(user=user or make_user(role=Role.DOCTOR), **row)
    return make


@pytest.fixture
def make_appointment(make_patient, make_staff):
    def make(scheduled_for, patient=None, staff=None, **fields):
        row = dict(reason='Check-up')
        row.update(fields)
        return Appointment.objects.create(
            patient=patient or make_patient(), staff=staff or make_staff(),
            scheduled_for=scheduled_for, **row,
        )
    return make
