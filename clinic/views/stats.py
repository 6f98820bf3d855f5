"""
Dashboard statistics endpoint.

Counts come from aggregate queries; ``bedOccupancy`` is a configured
placeholder because no bed or room data is tracked.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.services.stats import clinic_stats


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def stats(request):
    return Response(clinic_stats())
