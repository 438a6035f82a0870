# tracker/middleware.py
import logging
import time

logger = logging.getLogger('tracker.requests')


class RequestLogMiddleware:
    """Logs method, path, status and duration of every request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        start = time.monotonic()
        response = self.get_response(request)
        duration_ms = (time.monotonic() - start) * 1000

        client = request.META.get('REMOTE_ADDR', 'unknown')
        line = f"{request.method} {request.get_full_path()} - {response.status_code} - {duration_ms:.1f}ms - {client}"
        if response.status_code >= 500:
            logger.error(line)
        elif response.status_code >= 400:
            logger.warning(line)
        else:
            logger.info(line)
        return response
