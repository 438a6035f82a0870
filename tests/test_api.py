"""
End-to-end flow plus the cross-cutting API behaviour: envelope, health
and rate limiting.
"""
from unittest import mock

import pytest
from django.db import DatabaseError

from tracker.throttling import RouteRateThrottle

pytestmark = pytest.mark.django_db


def test_end_to_end_task_flow(api_client):
    registered = api_client.post('/api/auth/register/', {
        'email': 'u1@example.com',
        'username': 'u1',
        'first_name': 'User',
        'last_name': 'One',
        'password': 'password123',
    }, format='json')
    assert registered.status_code == 201
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {registered.json()['data']['token']}")

    created = api_client.post('/api/projects/', {'name': 'P'}, format='json')
    assert created.status_code == 201
    project = created.json()['data']
    assert project['role'] == 'OWNER'
    assert len(project['boards']) == 1
    columns = {c['name']: c['id'] for c in project['boards'][0]['columns']}
    assert list(columns) == ['To Do', 'In Progress', 'Done']

    task = api_client.post('/api/tasks/', {'column_id': columns['To Do'], 'title': 'T'}, format='json')
    assert task.status_code == 201
    task_id = task.json()['data']['id']
    assert task.json()['data']['position'] == 0

    moved = api_client.put(f'/api/tasks/{task_id}/', {'column_id': columns['In Progress']}, format='json')
    assert moved.status_code == 200

    detail = api_client.get(f"/api/projects/{project['id']}/").json()['data']
    by_name = {c['name']: c for c in detail['boards'][0]['columns']}
    assert by_name['To Do']['tasks'] == []
    assert [(t['id'], t['position']) for t in by_name['In Progress']['tasks']] == [(task_id, 0)]

    assert api_client.delete(f'/api/tasks/{task_id}/').status_code == 200
    missing = api_client.get(f'/api/tasks/{task_id}/')
    assert missing.status_code == 404
    assert missing.json()['success'] is False


def test_error_envelope(owner, client_for):
    response = client_for(owner).post('/api/projects/', {}, format='json')

    body = response.json()
    assert response.status_code == 400
    assert body['success'] is False
    assert body['message'] == 'Validation failed'
    assert body['errors'] == [{'field': 'name', 'message': 'This field is required.'}]


def test_health(api_client):
    response = api_client.get('/api/health/')

    assert response.status_code == 200
    data = response.json()['data']
    assert data['status'] == 'healthy'
    assert data['database']['status'] == 'healthy'
    assert {'timestamp', 'uptime', 'version'} <= set(data)


def test_health_detailed(api_client):
    data = api_client.get('/api/health/detailed/').json()['data']

    assert {'environment', 'pid', 'cache'} <= set(data)


def test_health_reports_database_outage(api_client):
    with mock.patch('django.db.backends.base.base.BaseDatabaseWrapper.cursor', side_effect=DatabaseError('connection refused')):
        response = api_client.get('/api/health/')

    assert response.status_code == 503
    assert response.json()['success'] is False
    assert response.json()['data']['database']['status'] == 'unhealthy'


def test_rate_limit_per_route(owner, client_for, settings):
    settings.RATE_LIMITS = {'default': '2/1m', 'auth': '2/1m'}
    client = client_for(owner)

    statuses = [client.get('/api/projects/').status_code for _ in range(3)]
    other_route = client.get('/api/auth/me/')

    assert statuses == [200, 200, 429]
    assert other_route.status_code == 200


def test_rate_limit_response(owner, client_for, settings):
    settings.RATE_LIMITS = {'default': '1/15m', 'auth': '1/15m'}
    client = client_for(owner)
    client.get('/api/projects/')

    response = client.get('/api/projects/')

    assert response.status_code == 429
    assert response.json()['success'] is False
    assert response.json()['retry_after'] > 0
    assert 'Retry-After' in response


def test_auth_routes_use_auth_rate(api_client, settings):
    settings.RATE_LIMITS = {'default': '100/1m', 'auth': '1/1m'}
    payload = {'email': 'nobody@example.com', 'password': 'password123'}

    first = api_client.post('/api/auth/login/', payload, format='json')
    second = api_client.post('/api/auth/login/', payload, format='json')

    assert first.status_code == 401
    assert second.status_code == 429


def test_throttle_starts_on_the_default_rate(settings):
    settings.RATE_LIMITS = {'default': '9/15m', 'auth': '1/1m'}

    throttle = RouteRateThrottle()

    assert throttle.scope == 'default'
    assert (throttle.num_requests, throttle.duration) == (9, 900)
    assert throttle.wait() == 90
