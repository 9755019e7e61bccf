# forum/api/users/test_users.py
import uuid

import pytest

from forum.core.errors import InvalidReference, NotFound


def test_profile_hides_credentials(services, make_user):
    user = make_user('dora', reset_password_token='abc')
    profile = services['users'].get_user_profile(user['id'])
    assert profile['username'] == 'dora'
    assert profile['firstName'] == 'Dora'
    assert 'password' not in profile
    assert 'reset_password_token' not in profile


def test_unknown_and_malformed_user_ids(services):
    with pytest.raises(NotFound):
        services['users'].get_user_profile(str(uuid.uuid4()))
    with pytest.raises(InvalidReference):
        services['users'].get_user_profile('42')


def test_user_routes(client, make_user):
    older = make_user('old')
    newer = make_user('new')
    body = client.get('/api/users/').get_json()
    assert [u['id'] for u in body] == [newer['id'], older['id']]
    assert client.get(f"/api/users/{older['id']}").get_json()['email'] == 'old@example.com'
