"""
Patient endpoints.

Symmetric CRUD over ``/api/patients``. ``PUT`` replaces every field,
``PATCH`` accepts any subset. Deleting a patient that still has
appointments is refused with 409.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import PatientPolicy
from clinic.serializers.patient import PatientSerializer
from clinic.services import patients as patient_service

NOT_FOUND = 'Patient not found'


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, PatientPolicy])
def patients(request):
    if request.method == 'GET':
        return Response(PatientSerializer(patient_service.list_patients(), many=True).data)

    s = PatientSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = patient_service.create_patient(**s.validated_data)
    return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, PatientPolicy])
def patient_detail(request, pk: int):
    if request.method == 'GET':
        patient = patient_service.get_patient(pk)
        if patient is None:
            raise NotFound(NOT_FOUND)
        return Response(PatientSerializer(patient).data)

    if request.method == 'DELETE':
        if not patient_service.delete_patient(pk):
            raise NotFound(NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = PatientSerializer(data=request.data, partial=request.method == 'PATCH')
    s.is_valid(raise_exception=True)
    patient = patient_service.update_patient(pk, **s.validated_data)
    if patient is None:
        raise NotFound(NOT_FOUND)
    return Response(PatientSerializer(patient).data)
