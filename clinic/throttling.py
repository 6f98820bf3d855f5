from rest_framework.throttling import SimpleRateThrottle


class LoginRateThrottle(SimpleRateThrottle):
    """Per-IP limit on credential checks, rate taken from ``DEFAULT_THROTTLE_RATES['login']``.

    Applies whether or not the caller already holds a session.
    """
    scope = 'login'

    def get_cache_key(self, request, view):
        return self.cache_format % {'scope': self.scope, 'ident': self.get_ident(request)}
