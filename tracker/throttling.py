# tracker/throttling.py
import logging
import re

from django.conf import settings
from django.utils import timezone
from rest_framework.throttling import SimpleRateThrottle

logger = logging.getLogger(__name__)

RATE_PATTERN = re.compile(r'^(\d+)/(\d*)([smhd])$')
PERIODS = {'s': 1, 'm': 60, 'h': 3600, 'd': 86400}


class RouteRateThrottle(SimpleRateThrottle):
    """
    Counts requests per client address and request path inside a fixed window.

    Counters live in the default cache, so they are per process with the local
    memory backend and shared when Redis is configured. A view picks a stricter
    limit with `throttle_scope = 'auth'`.
    """
    cache_format = 'throttle_%(scope)s_%(ident)s'
    scope = 'default'

    def __init__(self):
        self.history = []
        self.now = None
        self.resolve_rate(self.scope)

    def resolve_rate(self, scope):
        self.scope = scope
        self.rate = self.get_rate()
        self.num_requests, self.duration = self.parse_rate(self.rate)

    def allow_request(self, request, view):
        self.resolve_rate(getattr(view, 'throttle_scope', None) or 'default')
        allowed = super().allow_request(request, view)
        if not allowed:
            logger.warning(f"Rate limit exceeded for {self.get_ident(request)} on {request.path} at {timezone.now()}")
        return allowed

    def get_rate(self):
        return settings.RATE_LIMITS.get(self.scope, settings.RATE_LIMITS['default'])

    def parse_rate(self, rate):
        if rate is None:
            return (None, None)
        match = RATE_PATTERN.match(rate.strip())
        if not match:
            raise ValueError(f"Invalid rate limit '{rate}', expected e.g. '100/15m'")
        num, multiplier, unit = match.groups()
        return int(num), int(multiplier or 1) * PERIODS[unit]

    def get_cache_key(self, request, view):
        ident = f"{self.get_ident(request)}:{request.path}"
        return self.cache_format % {'scope': self.scope, 'ident': ident}
