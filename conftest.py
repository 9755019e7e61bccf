# conftest.py
"""
Shared pytest fixtures.

Usage: python -m pytest -v

The app under test always runs on the in-memory store with a ticking
clock, so creation order is deterministic.
"""

from datetime import datetime, timedelta, timezone

import pytest
from flask_jwt_extended import create_access_token

from forum import create_app
from forum.models import USERS
from forum.store import MemoryStore


class TickingClock:
    """Each call returns a time one second later than the previous one."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        self.current = self.current + self.step
        return self.current


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def sent_resets():
    """(email, token) pairs handed to the password-reset mailer."""
    return []


@pytest.fixture
def app(store, clock, sent_resets):
    return create_app('testing', store=store, clock=clock,
                      mailer=lambda email, token: sent_resets.append((email, token)))


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def services(app):
    return app.services


@pytest.fixture
def make_user(store, clock):
    """Inserts a user document directly and returns it."""
    counter = {'n': 0}

    def _make_user(username=None, **overrides):
        counter['n'] += 1
        username = username or f"user{counter['n']}"
        data = {
            'first_name': username.capitalize(),
            'last_name': 'Tester',
            'username': username,
            'email': f"{username}@example.com",
            'password': 'not-a-real-hash',
            'created_at': clock(),
        }
        data.update(overrides)
        return store.create(USERS, data)

    return _make_user


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user_id):
        with app.app_context():
            token = create_access_token(identity=user_id)
        return {'Authorization': f'Bearer {token}'}

    return _auth_headers


@pytest.fixture
def course(services):
    return services['courses'].create_course('JavaScript', 'Everything JavaScript')


@pytest.fixture
def author(make_user):
    return make_user('alice')


@pytest.fixture
def topic(services, course, author):
    return services['topics'].create_topic(author['id'], course['id'], 'Closures explained', 'How do closures work?')
