# forum/engine/read_model.py
"""
Read pipeline: raw documents -> populated tree -> derived counts -> external view.

Every query in the services ends here, so each entity kind is described
once (collection, population plan, aggregation step, view schema).
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from forum.engine import aggregator
from forum.engine.materializer import EntityKind, materialize, materialize_many
from forum.engine.plans import COMMENT_PLAN, COURSE_PLAN, REPLY_PLAN, TOPIC_PLAN, USER_PLAN
from forum.engine.population import Populate, ReferenceResolver
from forum.store.base import DocumentStore


@dataclass(frozen=True)
class ReadModel:
    plan: Sequence[Populate]
    annotate: Callable[[Dict[str, Any]], Dict[str, Any]]


READ_MODELS = {
    EntityKind.USER: ReadModel(USER_PLAN, aggregator.annotate_user),
    EntityKind.COURSE: ReadModel(COURSE_PLAN, aggregator.annotate_course),
    EntityKind.COURSE_DETAIL: ReadModel(COURSE_PLAN, aggregator.annotate_course),
    EntityKind.TOPIC: ReadModel(TOPIC_PLAN, aggregator.annotate_topic),
    EntityKind.COMMENT: ReadModel(COMMENT_PLAN, aggregator.annotate_comment),
    EntityKind.REPLY: ReadModel(REPLY_PLAN, aggregator.annotate_reply),
}


class ReadPipeline:

    def __init__(self, store: DocumentStore):
        self.resolver = ReferenceResolver(store)

    def render_many(self, kind: EntityKind, docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        model = READ_MODELS[kind]
        docs = self.resolver.resolve(list(docs), model.plan)
        for doc in docs:
            model.annotate(doc)
        return materialize_many(kind, docs)

    def prepare(self, kind: EntityKind, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Populates and annotates `doc` in place without materializing it (for nesting in another view)."""
        model = READ_MODELS[kind]
        self.resolver.resolve_one(doc, model.plan)
        return model.annotate(doc)

    def render(self, kind: EntityKind, doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if doc is None:
            return None
        return materialize(kind, self.prepare(kind, doc))

    def renderer(self, kind: EntityKind) -> Callable[[List[Dict[str, Any]]], List[Dict[str, Any]]]:
        """Page.to_connection hook."""
        return lambda docs: self.render_many(kind, docs)
