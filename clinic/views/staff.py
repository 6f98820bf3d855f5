from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import StaffPolicy
from clinic.serializers.staff import StaffDetailSerializer, StaffSerializer
from clinic.services import staff as staff_service

NOT_FOUND = 'Staff not found'


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, StaffPolicy])
def staff_collection(request):
    """List staff joined with their users, or create a staff row for an existing user."""
    if request.method == 'GET':
        return Response(StaffDetailSerializer(staff_service.list_staff(), many=True).data)

    s = StaffSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    staff = staff_service.create_staff(**s.validated_data)
    return Response(StaffDetailSerializer(staff).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def staff_departments(request):
    return Response(staff_service.list_departments())


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, StaffPolicy])
def staff_detail(request, pk: int):
    if request.method == 'GET':
        staff = staff_service.get_staff(pk)
        if staff is None:
            raise NotFound(NOT_FOUND)
        return Response(StaffDetailSerializer(staff).data)

    if request.method == 'DELETE':
        if not staff_service.delete_staff(pk):
            raise NotFound(NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = StaffSerializer(data=request.data, partial=request.method == 'PATCH')
    s.is_valid(raise_exception=True)
    staff = staff_service.update_staff(pk, **s.validated_data)
    if staff is None:
        raise NotFound(NOT_FOUND)
    return Response(StaffDetailSerializer(staff).data)
