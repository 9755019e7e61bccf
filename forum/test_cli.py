# forum/test_cli.py
from forum.models import COURSES, REPLIES, TOPICS


def test_seed_courses_command(app, store):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['seed-courses'])
    assert result.exit_code == 0
    assert 'JavaScript' in result.output
    assert store.count(COURSES) == 5

    result = runner.invoke(args=['seed-courses'])
    assert 'nothing to do' in result.output
    assert store.count(COURSES) == 5


def test_backfill_commands(app, store, topic):
    store.update(TOPICS, topic['id'], {'slug': 'stale'})
    store.create(REPLIES, {'text': 'legacy', 'comment': 'c', 'created_by': 'u', 'likes': []})

    runner = app.test_cli_runner()
    assert 'Slugs updated: 1' in runner.invoke(args=['backfill-slugs']).output
    assert 'Replies updated: 1' in runner.invoke(args=['backfill-timestamps']).output
    assert store.get(TOPICS, topic['id'])['slug'] == 'closures-explained'
