# forum/api/courses/test_courses.py
import pytest

from forum.api.courses.services import DEFAULT_COURSES
from forum.core.errors import Conflict, NotFound
from forum.engine import PageRequest
from forum.models import TOPICS


def test_create_course_derives_slug(services):
    course = services['courses'].create_course('Backend Development', 'Servers and databases')
    assert course['slug'] == 'backend-development'
    assert set(course) == {'id', 'title', 'slug', 'description', 'createdAt', 'updatedAt'}


def test_duplicate_course_title_is_a_conflict(services, course):
    with pytest.raises(Conflict) as excinfo:
        services['courses'].create_course('JavaScript', 'again')
    assert excinfo.value.error_code == 'COURSE_EXISTS'


def test_course_detail_has_live_topic_stats(services, store, course, author):
    detail = services['courses'].get_course_by_slug('javascript')
    assert detail['topicCount'] == 0
    assert detail['latestTopic'] is None

    topics = services['topics']
    topics.create_topic(author['id'], course['id'], 'First', 'a')
    newest = topics.create_topic(author['id'], course['id'], 'Second', 'b')

    detail = services['courses'].get_course_by_id(course['id'])
    assert detail['topicCount'] == 2
    assert detail['latestTopic']['id'] == newest['id']
    assert detail['latestTopic']['createdBy']['username'] == 'alice'


def test_topic_count_does_not_depend_on_course_topic_list(services, store, clock, course, author, topic):
    # a topic whose course link was never written still counts
    store.create(TOPICS, {'title': 'Orphan link', 'slug': 'orphan-link', 'description': '',
                          'course': course['id'], 'created_by': author['id'], 'created_at': clock()})
    assert services['courses'].get_course_by_id(course['id'])['topicCount'] == 2


def test_unknown_course_slug(services):
    with pytest.raises(NotFound):
        services['courses'].get_course_by_slug('cobol')


def test_seed_default_courses_is_idempotent(services, course):
    created = services['courses'].seed_default_courses()
    assert created == [c['title'] for c in DEFAULT_COURSES if c['title'] != 'JavaScript']
    assert services['courses'].seed_default_courses() == []

    connection = services['courses'].get_all_courses(PageRequest(first=10))
    assert connection['totalCount'] == 5
    slugs = [edge['node']['slug'] for edge in connection['edges']]
    assert slugs[0] == 'c'
    assert slugs[-1] == 'javascript'


def test_course_connection_over_http(client, services):
    services['courses'].seed_default_courses()

    body = client.get('/api/courses/?first=2').get_json()
    assert len(body['edges']) == 2
    assert body['pageInfo']['hasNextPage'] is True
    assert body['totalCount'] == 5

    rest = client.get(f"/api/courses/?first=10&after={body['pageInfo']['endCursor']}").get_json()
    assert len(rest['edges']) == 3
    assert rest['pageInfo']['hasNextPage'] is False


def test_course_routes(client, course, topic):
    detail = client.get(f"/api/courses/{course['id']}").get_json()
    assert detail['topicCount'] == 1
    assert detail['latestTopic']['slug'] == 'closures-explained'
    assert client.get('/api/courses/slug/javascript').status_code == 200
    assert client.get('/api/courses/slug/nothing-here').status_code == 404
    assert client.get('/api/courses/?first=abc').status_code == 400


def test_latest_topic_matches_the_topic_view(services, make_user, course, author, topic):
    bob = make_user('bob')
    comment = services['comments'].create_comment(bob['id'], topic['id'], 'Great question')
    services['comments'].like_comment(author['id'], comment['id'])

    latest = services['courses'].get_course_by_id(course['id'])['latestTopic']

    assert latest == services['topics'].get_topic_by_id(topic['id'])
    assert latest['commentCount'] == 1
    assert latest['likesCount'] == 1
    assert latest['createdBy']['id'] == author['id']
    assert latest['comments'][0]['createdBy']['username'] == 'bob'
