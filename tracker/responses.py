# tracker/responses.py
from rest_framework import status as http_status
from rest_framework.response import Response


def envelope(data=None, message=None, status=http_status.HTTP_200_OK, **extra):
    """Successful API response: {"success": true, "message": ..., "data": ...}."""
    body = {'success': True}
    if message:
        body['message'] = message
    if data is not None:
        body['data'] = data
    body.update(extra)
    return Response(body, status=status)
