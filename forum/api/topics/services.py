# forum/api/topics/services.py

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from forum.core.errors import Conflict, Forbidden, NotFound
from forum.engine import EntityKind, PageRequest
from forum.engine.aggregator import non_negative_int
from forum.models import COURSES, TOPICS, Topic
from forum.services.base import BaseForumService
from forum.utils.ids import require_id

logger = logging.getLogger(__name__)


class TopicService(BaseForumService):
    """
    Topic reads (single, by course, full listing) and writes (creation, view counter).
    Every read goes through the read pipeline, so comment/like/reply counts are
    recomputed from the live reference lists.
    """

    def get_topics_by_course(self, course_id: str, page: PageRequest) -> Dict[str, Any]:
        course = self._get_or_404(COURSES, course_id, "Course")
        result = self.paginator.paginate(TOPICS, page, [('course', '==', course['id'])])
        return result.to_connection(self.reader.renderer(EntityKind.TOPIC))

    def list_topics(self) -> List[Dict[str, Any]]:
        """Every topic, newest first, unpaginated."""
        docs = self.store.find(TOPICS, order_by='created_at', descending=True)
        return self.reader.render_many(EntityKind.TOPIC, docs)

    def get_topic_by_id(self, topic_id: str) -> Dict[str, Any]:
        doc = self._get_or_404(TOPICS, topic_id, "Topic")
        return self.reader.render(EntityKind.TOPIC, doc)

    def get_topic_by_slug(self, slug: str) -> Dict[str, Any]:
        doc = self.store.find_one(TOPICS, [('slug', '==', slug)]) if slug else None
        if doc is None:
            raise NotFound("Topic not found")
        return self.reader.render(EntityKind.TOPIC, doc)

    def create_topic(self, user_id: Optional[str], course_id: str, title: str, description: str) -> Dict[str, Any]:
        user_id = self._require_user(user_id)
        course_id = require_id(course_id, "course id")
        title = self._require_text(title, 'title')
        description = self._require_text(description, 'description')

        if self.store.get(COURSES, course_id) is None:
            raise NotFound("Course not found")

        slug = self._unique_slug(title)
        now = self.clock()
        topic = Topic(
            title=title,
            slug=slug,
            description=description,
            course=course_id,
            created_by=user_id,
            created_at=now,
            updated_at=now
        )
        # 1. the topic itself; if this fails nothing else is touched
        saved = self.store.create(TOPICS, asdict(topic))
        logger.info(f"Topic created: {saved['id']} in course {course_id} by {user_id}")

        # 2. the course's topic list (separate, non-atomic step)
        self._append_child(COURSES, course_id, 'topics', saved['id'])

        return self.reader.render(EntityKind.TOPIC, saved)

    def _unique_slug(self, title: str, exclude_id: Optional[str] = None) -> str:
        slug = self.slugger(title)
        existing = self.store.find_one(TOPICS, [('slug', '==', slug)])
        if existing and existing['id'] != exclude_id:
            raise Conflict(f"A topic with slug '{slug}' already exists", error_code="SLUG_TAKEN")
        return slug

    def rename_topic(self, user_id: Optional[str], topic_id: str, title: str) -> Dict[str, Any]:
        """Changes the title (author only) and regenerates the slug from it."""
        user_id = self._require_user(user_id)
        doc = self._get_or_404(TOPICS, topic_id, "Topic")
        if doc.get("created_by") != user_id:
            raise Forbidden("Only the author can rename this topic")
        title = self._require_text(title, 'title')
        slug = self._unique_slug(title, exclude_id=doc['id'])
        self.store.update(TOPICS, doc['id'], {'title': title, 'slug': slug, 'updated_at': self.clock()})
        return self.reader.render(EntityKind.TOPIC, self.store.get(TOPICS, doc['id']))

    def increment_views(self, topic_id: str) -> Dict[str, Any]:
        """+1 on the view counter. A missing or corrupt counter is treated as 0 first."""
        doc = self._get_or_404(TOPICS, topic_id, "Topic")
        current = doc.get('views')
        if isinstance(current, int) and not isinstance(current, bool) and current >= 0:
            self.store.increment(TOPICS, doc['id'], 'views', 1)
        else:
            # normalise then set; not atomic, but only reachable for damaged documents
            self.store.update(TOPICS, doc['id'], {'views': non_negative_int(current) + 1})
        return self.reader.render(EntityKind.TOPIC, self.store.get(TOPICS, doc['id']))

    def backfill_slugs(self) -> int:
        """
        Regenerates every topic slug from its current title. Returns the number of topics updated.
        A topic whose new slug already belongs to another topic keeps its old slug and is logged.
        """
        updated = 0
        for doc in self.store.find(TOPICS):
            slug = self.slugger(doc.get('title') or '')
            if not slug or doc.get('slug') == slug:
                continue
            try:
                slug = self._unique_slug(doc.get('title') or '', exclude_id=doc['id'])
            except Conflict:
                logger.warning(f"Slug '{slug}' for topic {doc['id']} is taken; keeping '{doc.get('slug')}'")
                continue
            self.store.update(TOPICS, doc['id'], {'slug': slug})
            updated += 1
        logger.info(f"Topic slug backfill finished: {updated} updated")
        return updated
