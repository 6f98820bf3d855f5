"""
Management command to seed a development database.

Creates one login per role, a staff record for each clinical user, a few
patients and a handful of appointments spread over today. Safe to run
repeatedly: users are matched by email and their password and role are
reset; patients and appointments are only added when the tables are
empty.
"""
from datetime import date, timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from clinic.models import Appointment, AppointmentStatus, Patient, Role, Staff, User
from clinic.services.appointments import day_bounds

DEMO_USERS = [
    ('admin@medicare.local', 'Ada', 'Admin', Role.ADMIN, None),
    ('doctor@medicare.local', 'Gregory', 'House', Role.DOCTOR, ('Cardiology', 'Interventional cardiology')),
    ('nurse@medicare.local', 'Florence', 'Nightingale', Role.NURSE, ('Nursing', None)),
    ('reception@medicare.local', 'Pam', 'Beesly', Role.RECEPTIONIST, ('Administration', None)),
]

DEMO_PATIENTS = [
    dict(first_name='John', last_name='Doe', date_of_birth=date(1980, 3, 14), gender='male',
         phone='555-0100', address='1 Main St', city='Springfield', state='IL', zip_code='62701',
         blood_group='O+'),
    dict(first_name='Jane', last_name='Roe', date_of_birth=date(1992, 11, 2), gender='female',
         email='jane.roe@example.com', phone='555-0101', address='22 Oak Ave', city='Springfield',
         state='IL', zip_code='62702', blood_group='A-', medical_notes='Penicillin allergy'),
    dict(first_name='Alex', last_name='Kim', date_of_birth=date(2015, 6, 30), gender='other',
         phone='555-0102', address='9 Elm Rd', city='Shelbyville', state='IL', zip_code='62565'),
]


class Command(BaseCommand):
    help = "Seed demo users, staff, patients and today's appointments (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument('--password', default='password123',
                            help='Password assigned to every demo login (min 8 characters).')

    @transaction.atomic
    def handle(self, *args, **options):
        password = options['password']
        staff_rows = []
        admin = None
        for email, first, last, role, employment in DEMO_USERS:
            user, created = User.objects.get_or_create(
                email=email, defaults={'first_name': first, 'last_name': last, 'role': role},
            )
            user.role = role
            user.is_active = True
            user.set_password(password)
            user.save(update_fields=['password', 'role', 'is_active'])
            if role == Role.ADMIN:
                admin = user
            if employment:
                department, specialization = employment
                staff, _ = Staff.objects.get_or_create(
                    user=user,
                    defaults={'department': department, 'specialization': specialization,
                              'phone': '555-0199', 'hire_date': date(2020, 1, 6)},
                )
                staff_rows.append(staff)
            self.stdout.write(self.style.SUCCESS(f"ok: {email} ({role}){' created' if created else ''}"))

        if Patient.objects.exists():
            self.stdout.write('patients present, skipping patients and appointments')
            return

        patients = [Patient.objects.create(**row) for row in DEMO_PATIENTS]
        start, _ = day_bounds(timezone.now())
        slots = [start + timedelta(hours=h) for h in (9, 10, 11, 14)]
        statuses = [AppointmentStatus.CONFIRMED, AppointmentStatus.PENDING,
                    AppointmentStatus.PENDING, AppointmentStatus.COMPLETED]
        for i, (when, status) in enumerate(zip(slots, statuses)):
            Appointment.objects.create(
                patient=patients[i % len(patients)],
                staff=staff_rows[i % len(staff_rows)],
                scheduled_for=when,
                reason='Routine check-up',
                status=status,
                created_by=admin,
            )
        self.stdout.write(self.style.SUCCESS(
            f"seeded {len(patients)} patients and {len(slots)} appointments"
        ))
