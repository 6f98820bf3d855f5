import structlog
from django.db import DatabaseError, connections
from django.http import JsonResponse

logger = structlog.get_logger(__name__)


def healthz(request):
    """Liveness plus a round trip to the default database."""
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except DatabaseError as e:
        logger.error('health.db_unreachable', error=str(e))
        return JsonResponse({'ok': False, 'error': str(e)}, status=500)
    return JsonResponse({'ok': True, 'db': bool(row and row[0] == 1)})
