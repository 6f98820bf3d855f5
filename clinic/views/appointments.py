"""
Appointment endpoints.

Reads return the joined shape (appointment + patient + staff + user);
writes return the plain appointment. The creator is taken from the
session, never from the body. Every write passes through the configured
overlap policy; under ``warn`` the overlapping ids are echoed in the
``X-Schedule-Conflict`` header.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import AppointmentPolicy
from clinic.serializers.appointment import AppointmentDetailSerializer, AppointmentSerializer
from clinic.services import appointments as appointment_service

NOT_FOUND = 'Appointment not found'
CONFLICT_HEADER = 'X-Schedule-Conflict'


def _flag_overlaps(resp: Response, overlaps: list[int]) -> Response:
    if overlaps:
        resp[CONFLICT_HEADER] = ','.join(str(i) for i in overlaps)
    return resp


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, AppointmentPolicy])
def appointments(request):
    if request.method == 'GET':
        return Response(AppointmentDetailSerializer(appointment_service.list_appointments(), many=True).data)

    s = AppointmentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    overlaps = appointment_service.check_schedule(vd['staff'].id, vd['scheduled_for'], status=vd.get('status'))
    appointment = appointment_service.create_appointment(created_by=request.user, **vd)
    return _flag_overlaps(
        Response(AppointmentSerializer(appointment).data, status=status.HTTP_201_CREATED), overlaps
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated, AppointmentPolicy])
def appointments_today(request):
    return Response(AppointmentDetailSerializer(appointment_service.todays_appointments(), many=True).data)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, AppointmentPolicy])
def appointment_detail(request, pk: int):
    if request.method == 'GET':
        appointment = appointment_service.get_appointment(pk)
        if appointment is None:
            raise NotFound(NOT_FOUND)
        return Response(AppointmentDetailSerializer(appointment).data)

    if request.method == 'DELETE':
        if not appointment_service.delete_appointment(pk):
            raise NotFound(NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # Both PUT and PATCH take a partial body.
    s = AppointmentSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    current = appointment_service.get_appointment(pk)
    if current is None:
        raise NotFound(NOT_FOUND)
    overlaps: list[int] = []
    if {'staff', 'scheduled_for', 'status'} & vd.keys():
        overlaps = appointment_service.check_schedule(
            vd.get('staff', current.staff).id,
            vd.get('scheduled_for', current.scheduled_for),
            status=vd.get('status', current.status),
            exclude_id=pk,
        )

    appointment = appointment_service.update_appointment(pk, **vd)
    if appointment is None:
        raise NotFound(NOT_FOUND)
    return _flag_overlaps(Response(AppointmentSerializer(appointment).data), overlaps)
