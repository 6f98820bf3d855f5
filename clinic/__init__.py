"""Clinic application for the MediCare backend.

Models, the persistence gateway, serializers, views and route
registrations for patients, staff and appointments.
"""
