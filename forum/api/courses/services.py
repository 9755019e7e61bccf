# forum/api/courses/services.py

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from forum.core.errors import Conflict, NotFound
from forum.engine import EntityKind, PageRequest
from forum.models import COURSES, TOPICS, Course
from forum.services.base import BaseForumService

logger = logging.getLogger(__name__)

DEFAULT_COURSES = [
    {'title': 'JavaScript', 'description': 'Ask questions and share tips for JavaScript, jQuery, React, Node, D3 - anything that touches the vast JavaScript and npm ecosystem.'},
    {'title': 'Python', 'description': 'Ask questions and share tips related to Python and any tools in the Python ecosystem.'},
    {'title': 'HTML-CSS', 'description': 'Ask about anything related to HTML and CSS, including web design tools like Sass and Bootstrap'},
    {'title': 'Backend Development', 'description': 'Discuss Linux, SQL, Git, Node.js / Django, Docker, NGINX, and any sort of database / server tools.'},
    {'title': 'C#', 'description': 'Ask questions and share tips related to C# and any tools in the .NET ecosystem.'},
]


class CourseService(BaseForumService):
    """Courses: paginated listing, lookups with live topic statistics, creation and seeding."""

    def get_all_courses(self, page: PageRequest) -> Dict[str, Any]:
        result = self.paginator.paginate(COURSES, page)
        return result.to_connection(self.reader.renderer(EntityKind.COURSE))

    def get_course_by_id(self, course_id: str) -> Dict[str, Any]:
        doc = self._get_or_404(COURSES, course_id, "Course")
        return self._render_detail(doc)

    def get_course_by_slug(self, slug: str) -> Dict[str, Any]:
        doc = self.store.find_one(COURSES, [('slug', '==', slug)]) if slug else None
        if doc is None:
            raise NotFound("Course not found")
        return self._render_detail(doc)

    def _render_detail(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Adds topicCount and latestTopic, both taken from the topics collection itself."""
        course_filter = [('course', '==', doc['id'])]
        doc['topic_count'] = self.store.count(TOPICS, course_filter)
        latest = self.store.find(TOPICS, course_filter, order_by='created_at', descending=True, limit=1)
        # raw populated document; CourseDetailViewSchema materializes it once
        doc['latest_topic'] = self.reader.prepare(EntityKind.TOPIC, latest[0]) if latest else None
        return self.reader.render(EntityKind.COURSE_DETAIL, doc)

    def create_course(self, title: str, description: str) -> Dict[str, Any]:
        title = self._require_text(title, 'title')
        description = self._require_text(description, 'description')
        slug = self.slugger(title)

        if self.store.exists(COURSES, [('title', '==', title)]):
            raise Conflict(f"A course titled '{title}' already exists", error_code="COURSE_EXISTS")
        if self.store.exists(COURSES, [('slug', '==', slug)]):
            raise Conflict(f"A course with slug '{slug}' already exists", error_code="SLUG_TAKEN")

        now = self.clock()
        course = Course(title=title, slug=slug, description=description, created_at=now, updated_at=now)
        saved = self.store.create(COURSES, asdict(course))
        logger.info(f"Course created: {saved['id']} ({slug})")
        return self.reader.render(EntityKind.COURSE, saved)

    def seed_default_courses(self, courses: Optional[List[Dict[str, str]]] = None) -> List[str]:
        """Creates any default course whose title does not exist yet. Returns the titles created."""
        created = []
        for course in courses or DEFAULT_COURSES:
            if self.store.exists(COURSES, [('title', '==', course['title'])]):
                continue
            self.create_course(course['title'], course['description'])
            created.append(course['title'])
        return created
