import uuid

import structlog


class RequestLogContextMiddleware:
    """Bind request id, method, path and user id to every log line of a request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        structlog.contextvars.clear_contextvars()
        request_id = request.headers.get('X-Request-ID') or uuid.uuid4().hex
        user = getattr(request, 'user', None)
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.path,
            user_id=user.pk if user is not None and user.is_authenticated else None,
        )
        try:
            response = self.get_response(request)
        finally:
            structlog.contextvars.clear_contextvars()
        response['X-Request-ID'] = request_id
        return response
