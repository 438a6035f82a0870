"""Shared fixtures for the API tests."""

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from accounts.models import User
from accounts.services import issue_token
from projects import services as project_services
from projects.models import ProjectMember


@pytest.fixture(autouse=True)
def _isolated_state(settings, tmp_path):
    """Fresh rate-limit counters and a throwaway media root for every test."""
    cache.clear()
    settings.MEDIA_ROOT = str(tmp_path / 'uploads')
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    counter = {'n': 0}

    def _make_user(username=None, email=None, password='password123'):
        counter['n'] += 1
        username = username or f"user{counter['n']}"
        return User.objects.create_user(
            email=email or f"{username}@example.com",
            username=username,
            password=password,
            first_name='Test',
            last_name=username.capitalize(),
        )

    return _make_user


@pytest.fixture
def client_for():
    """Build an APIClient that sends the user's bearer token."""

    def _client_for(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")
        return client

    return _client_for


@pytest.fixture
def owner(make_user):
    return make_user('owner')


@pytest.fixture
def project(owner):
    return project_services.create_project(owner, 'Website Redesign', description='Q3 refresh')


@pytest.fixture
def board(project):
    return project.boards.get(position=0)


@pytest.fixture
def columns(board):
    """The seeded To Do / In Progress / Done columns, in position order."""
    return list(board.columns.order_by('position'))


@pytest.fixture
def member_with_role(make_user, project):
    """Create a user holding `role` in the shared project."""

    def _member_with_role(role, username=None):
        user = make_user(username or role.lower())
        ProjectMember.objects.create(project=project, user=user, role=role)
        return user

    return _member_with_role
