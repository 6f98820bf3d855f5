"""
Integration tests for the clinic API.

These walk the main flows a front desk goes through: signing in,
registering a patient, putting a staff member on the roster, booking
and rescheduling appointments and reading the dashboard.
"""
from datetime import date, timedelta

from django.core.cache import cache
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from ..models import Appointment, AppointmentStatus, Patient, Role, Staff, User

PASSWORD = 'Sup3rSecret!'


class ClinicAPITests(APITestCase):
    def setUp(self) -> None:
        cache.clear()
        self.admin = User.objects.create_user(
            email='admin@example.com', password=PASSWORD, first_name='Ada', last_name='Admin', role=Role.ADMIN,
        )
        self.doctor_user = User.objects.create_user(
            email='house@example.com', password=PASSWORD, first_name='Greg', last_name='House', role=Role.DOCTOR,
        )
        self.doctor = Staff.objects.create(
            user=self.doctor_user, department='Cardiology', phone='555-0001', hire_date=date(2019, 5, 1),
        )
        self.patient_body = {
            'firstName': 'John', 'lastName': 'Doe', 'dateOfBirth': '1980-01-01', 'gender': 'male',
            'phone': '555-1234', 'address': '1 Main St', 'city': 'Springfield', 'state': 'IL',
            'zipCode': '62701',
        }

    def login(self, email='admin@example.com', password=PASSWORD):
        r = self.client.post('/api/login', {'email': email, 'password': password}, format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK, r.data)
        return r

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------
    def test_login_session_roundtrip(self) -> None:
        r = self.login()
        self.assertEqual(r.data['email'], 'admin@example.com')
        self.assertEqual(r.data['role'], 'admin')
        self.assertNotIn('password', r.data)

        r = self.client.get('/api/user')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data['id'], self.admin.id)

        r = self.client.post('/api/logout')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        r = self.client.get('/api/user')
        self.assertEqual(r.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_login_is_case_insensitive_on_email(self) -> None:
        self.login(email='ADMIN@Example.com')

    def test_wrong_password_is_unauthorized(self) -> None:
        r = self.client.post('/api/login', {'email': 'admin@example.com', 'password': 'not-the-one'}, format='json')
        self.assertEqual(r.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(r.data, {'message': 'Unauthorized'})

    def test_unknown_email_is_unauthorized(self) -> None:
        r = self.client.post('/api/login', {'email': 'ghost@example.com', 'password': PASSWORD}, format='json')
        self.assertEqual(r.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_register_creates_account_and_session(self) -> None:
        r = self.client.post('/api/register', {
            'firstName': 'Nina', 'lastName': 'Nurse', 'email': 'Nina@Example.com',
            'password': PASSWORD, 'confirmPassword': PASSWORD, 'role': 'nurse',
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED, r.data)
        self.assertEqual(set(r.data), {'id', 'firstName', 'lastName', 'email', 'role'})
        self.assertEqual(r.data['email'], 'nina@example.com')
        self.assertEqual(r.data['role'], 'nurse')

        me = self.client.get('/api/user')
        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data['id'], r.data['id'])
        self.assertTrue(User.objects.get(id=r.data['id']).check_password(PASSWORD))

    def test_register_defaults_to_receptionist(self) -> None:
        r = self.client.post('/api/register', {
            'firstName': 'Rita', 'lastName': 'Desk', 'email': 'rita@example.com',
            'password': PASSWORD, 'confirmPassword': PASSWORD,
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED, r.data)
        self.assertEqual(r.data['role'], 'receptionist')

    # ------------------------------------------------------------------
    # Patients
    # ------------------------------------------------------------------
    def test_patient_lifecycle(self) -> None:
        self.login()
        r = self.client.post('/api/patients', self.patient_body, format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED, r.data)
        pid = r.data['id']
        self.assertIsNotNone(r.data['registeredAt'])
        self.assertIsNone(r.data['email'])
        self.assertIsNone(r.data['bloodGroup'])

        r = self.client.get(f'/api/patients/{pid}')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data['lastName'], 'Doe')
        registered_at = r.data['registeredAt']

        r = self.client.get('/api/patients')
        self.assertEqual([p['id'] for p in r.data], [pid])

        r = self.client.patch(f'/api/patients/{pid}', {'bloodGroup': 'AB-', 'city': 'Shelbyville'}, format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK, r.data)
        self.assertEqual(r.data['bloodGroup'], 'AB-')
        self.assertEqual(r.data['city'], 'Shelbyville')
        self.assertEqual(r.data['firstName'], 'John')
        self.assertEqual(r.data['registeredAt'], registered_at)

        body = dict(self.patient_body, firstName='Johnny', medicalNotes='Asthma')
        r = self.client.put(f'/api/patients/{pid}', body, format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK, r.data)
        self.assertEqual(r.data['firstName'], 'Johnny')
        self.assertEqual(r.data['medicalNotes'], 'Asthma')

        r = self.client.delete(f'/api/patients/{pid}')
        self.assertEqual(r.status_code, status.HTTP_204_NO_CONTENT)
        r = self.client.get(f'/api/patients/{pid}')
        self.assertEqual(r.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(r.data, {'message': 'Patient not found'})

    def test_put_requires_complete_patient(self) -> None:
        self.login()
        pid = self.client.post('/api/patients', self.patient_body, format='json').data['id']
        r = self.client.put(f'/api/patients/{pid}', {'firstName': 'Only'}, format='json')
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        fields = {e['field'] for e in r.data['errors']}
        self.assertIn('lastName', fields)
        self.assertNotIn('firstName', fields)

    def test_missing_patient_writes_are_404(self) -> None:
        self.login()
        r = self.client.patch('/api/patients/9999', {'city': 'Nowhere'}, format='json')
        self.assertEqual(r.status_code, status.HTTP_404_NOT_FOUND)
        r = self.client.delete('/api/patients/9999')
        self.assertEqual(r.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(r.data, {'message': 'Patient not found'})

    def test_patient_with_appointments_cannot_be_deleted(self) -> None:
        self.login()
        patient = Patient.objects.create(
            first_name='A', last_name='B', date_of_birth=date(2000, 1, 1), gender='other',
            phone='1', address='x', city='y', state='z', zip_code='0',
        )
        Appointment.objects.create(patient=patient, staff=self.doctor, scheduled_for=timezone.now(), reason='r')
        r = self.client.delete(f'/api/patients/{patient.id}')
        self.assertEqual(r.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(r.data['kind'], 'conflict')
        self.assertTrue(Patient.objects.filter(id=patient.id).exists())

    # ------------------------------------------------------------------
    # Staff
    # ------------------------------------------------------------------
    def test_staff_create_returns_joined_user(self) -> None:
        self.login()
        nurse = User.objects.create_user(
            email='nurse@example.com', password=PASSWORD, first_name='Flo', last_name='N', role=Role.NURSE,
        )
        r = self.client.post('/api/staff', {
            'userId': nurse.id, 'department': 'Nursing', 'phone': '555-2222', 'hireDate': '2021-02-03',
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED, r.data)
        self.assertEqual(r.data['userId'], nurse.id)
        self.assertTrue(r.data['isActive'])
        self.assertIsNone(r.data['specialization'])
        self.assertEqual(r.data['user']['email'], 'nurse@example.com')
        self.assertNotIn('password', r.data['user'])

        r = self.client.get('/api/staff')
        self.assertEqual([s['department'] for s in r.data], ['Cardiology', 'Nursing'])
        self.assertEqual(r.data[0]['user']['lastName'], 'House')

    def test_staff_patch_and_delete(self) -> None:
        self.login()
        r = self.client.patch(f'/api/staff/{self.doctor.id}', {'isActive': False}, format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK, r.data)
        self.assertFalse(r.data['isActive'])
        self.assertEqual(r.data['user']['id'], self.doctor_user.id)

        r = self.client.delete(f'/api/staff/{self.doctor.id}')
        self.assertEqual(r.status_code, status.HTTP_204_NO_CONTENT)
        r = self.client.get(f'/api/staff/{self.doctor.id}')
        self.assertEqual(r.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(r.data, {'message': 'Staff not found'})

    def test_departments_listing(self) -> None:
        self.login()
        r = self.client.get('/api/staff/departments')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertIn('Cardiology', r.data)

    def test_users_directory(self) -> None:
        self.login()
        r = self.client.get('/api/users')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual({u['email'] for u in r.data}, {'admin@example.com', 'house@example.com'})

    # ------------------------------------------------------------------
    # Appointments
    # ------------------------------------------------------------------
    def _create_patient(self) -> int:
        return self.client.post('/api/patients', self.patient_body, format='json').data['id']

    def test_appointment_creator_comes_from_session(self) -> None:
        self.login()
        pid = self._create_patient()
        when = (timezone.now() + timedelta(days=1)).replace(microsecond=0)
        r = self.client.post('/api/appointments', {
            'patientId': pid, 'staffId': self.doctor.id, 'scheduledFor': when.isoformat(),
            'reason': 'Chest pain', 'createdById': self.doctor_user.id,
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED, r.data)
        self.assertEqual(r.data['createdById'], self.admin.id)
        self.assertEqual(r.data['status'], 'pending')
        self.assertNotIn('patient', r.data)

        appointment = Appointment.objects.get(id=r.data['id'])
        self.assertEqual(appointment.created_by_id, self.admin.id)
        self.assertEqual(appointment.scheduled_for, when)

    def test_appointment_reads_are_joined(self) -> None:
        self.login()
        pid = self._create_patient()
        aid = self.client.post('/api/appointments', {
            'patientId': pid, 'staffId': self.doctor.id,
            'scheduledFor': (timezone.now() + timedelta(hours=2)).isoformat(), 'reason': 'Follow-up',
        }, format='json').data['id']

        r = self.client.get(f'/api/appointments/{aid}')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data['patient']['id'], pid)
        self.assertEqual(r.data['staff']['id'], self.doctor.id)
        self.assertEqual(r.data['staff']['user']['email'], 'house@example.com')

        r = self.client.get('/api/appointments')
        self.assertEqual([a['id'] for a in r.data], [aid])
        self.assertEqual(r.data[0]['patient']['firstName'], 'John')

    def test_appointment_list_is_newest_first(self) -> None:
        self.login()
        pid = self._create_patient()
        base = timezone.now()
        ids = []
        for days in (1, 3, 2):
            ids.append(self.client.post('/api/appointments', {
                'patientId': pid, 'staffId': self.doctor.id,
                'scheduledFor': (base + timedelta(days=days)).isoformat(), 'reason': 'Visit',
            }, format='json').data['id'])
        r = self.client.get('/api/appointments')
        self.assertEqual([a['id'] for a in r.data], [ids[1], ids[2], ids[0]])

    def test_appointment_put_is_partial(self) -> None:
        self.login()
        pid = self._create_patient()
        aid = self.client.post('/api/appointments', {
            'patientId': pid, 'staffId': self.doctor.id,
            'scheduledFor': timezone.now().isoformat(), 'reason': 'Visit',
        }, format='json').data['id']
        r = self.client.put(f'/api/appointments/{aid}', {'status': 'confirmed'}, format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK, r.data)
        self.assertEqual(r.data['status'], 'confirmed')
        self.assertEqual(r.data['reason'], 'Visit')
        self.assertEqual(r.data['createdById'], self.admin.id)

    def test_todays_appointments(self) -> None:
        self.login()
        pid = self._create_patient()
        now = timezone.now()
        today_id = self.client.post('/api/appointments', {
            'patientId': pid, 'staffId': self.doctor.id, 'scheduledFor': now.isoformat(), 'reason': 'Today',
        }, format='json').data['id']
        self.client.post('/api/appointments', {
            'patientId': pid, 'staffId': self.doctor.id,
            'scheduledFor': (now + timedelta(days=2)).isoformat(), 'reason': 'Later',
        }, format='json')

        r = self.client.get('/api/appointments/today')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual([a['id'] for a in r.data], [today_id])
        self.assertEqual(r.data[0]['staff']['user']['lastName'], 'House')

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------
    def test_stats(self) -> None:
        self.login()
        second = Staff.objects.create(
            user=self.admin, department='Administration', phone='555-0002', hire_date=date(2018, 1, 1),
        )
        patients = [
            Patient.objects.create(
                first_name=f'P{i}', last_name='Stat', date_of_birth=date(1990, 1, 1), gender='female',
                phone='1', address='a', city='c', state='s', zip_code='z',
            )
            for i in range(3)
        ]
        for i in range(5):
            Appointment.objects.create(
                patient=patients[i % 3], staff=(self.doctor, second)[i % 2],
                scheduled_for=timezone.now() + timedelta(days=i), reason='r',
                status=AppointmentStatus.PENDING,
            )
        r = self.client.get('/api/stats')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data, {'patientCount': 3, 'staffCount': 2, 'appointmentCount': 5, 'bedOccupancy': 76})

    def test_healthz(self) -> None:
        r = self.client.get('/healthz')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {'ok': True, 'db': True})
