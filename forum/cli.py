# forum/cli.py
"""
Maintenance commands, run with the Flask CLI:

    flask --app run seed-courses
    flask --app run backfill-slugs
    flask --app run backfill-timestamps
"""

import click
from flask import Flask, current_app
from flask.cli import with_appcontext


@click.command('seed-courses')
@with_appcontext
def seed_courses_command():
    """Creates the default courses that do not exist yet."""
    created = current_app.services['courses'].seed_default_courses()
    click.echo(f"Courses seeded: {', '.join(created) if created else 'nothing to do'}")


@click.command('backfill-slugs')
@with_appcontext
def backfill_slugs_command():
    """Regenerates every topic slug from its title."""
    updated = current_app.services['topics'].backfill_slugs()
    click.echo(f"Slugs updated: {updated}")


@click.command('backfill-timestamps')
@with_appcontext
def backfill_timestamps_command():
    """Sets a missing updated_at on replies."""
    updated = current_app.services['replies'].backfill_updated_at()
    click.echo(f"Replies updated: {updated}")


def register_commands(app: Flask) -> None:
    app.cli.add_command(seed_courses_command)
    app.cli.add_command(backfill_slugs_command)
    app.cli.add_command(backfill_timestamps_command)
