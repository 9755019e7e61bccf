# forum/engine/population.py
"""
Reference Resolver.

A population plan is a tuple of `Populate` nodes. Each node names a field
holding a foreign key (or a list of them), the collection it points into,
and the plan to apply to the fetched documents in turn:

    TOPIC_PLAN = (
        Populate('created_by', USERS),
        Populate('comments', COMMENTS, many=True, nested=(
            Populate('created_by', USERS),
            Populate('likes', USERS, many=True),
        )),
    )

`ReferenceResolver.resolve(docs, plan)` substitutes documents in place,
level by level, issuing one `get_many` per plan node no matter how many
parent documents share that level.

Broken references never raise:
- single-valued field -> None (the materializer renders a placeholder)
- list field          -> the dangling entry is dropped
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from forum.store.base import DocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Populate:
    field: str
    collection: str
    many: bool = False
    nested: Tuple['Populate', ...] = ()


def _as_key(value: Any):
    """Foreign key as stored, or None when the value cannot be a document id."""
    if isinstance(value, dict):
        # already populated
        value = value.get('id')
    if isinstance(value, str) and value:
        return value
    return None


class ReferenceResolver:

    def __init__(self, store: DocumentStore):
        self.store = store

    def resolve_one(self, doc: Dict[str, Any], plan: Sequence[Populate]) -> Dict[str, Any]:
        self.resolve([doc], plan)
        return doc

    def resolve(self, docs: List[Dict[str, Any]], plan: Sequence[Populate]) -> List[Dict[str, Any]]:
        """Populates every document in `docs` according to `plan`. Returns `docs`."""
        docs = [doc for doc in docs if isinstance(doc, dict)]
        if not docs:
            return docs
        for node in plan:
            self._resolve_node(docs, node)
        return docs

    def _resolve_node(self, docs: List[Dict[str, Any]], node: Populate) -> None:
        keys = []
        for doc in docs:
            raw = doc.get(node.field)
            if node.many:
                values = raw if isinstance(raw, list) else []
                keys.extend(k for k in map(_as_key, values) if k)
            else:
                key = _as_key(raw)
                if key:
                    keys.append(key)

        targets = self.store.get_many(node.collection, keys) if keys else {}

        children = []
        for doc in docs:
            raw = doc.get(node.field)
            if node.many:
                resolved = []
                for value in (raw if isinstance(raw, list) else []):
                    key = _as_key(value)
                    target = targets.get(key) if key else None
                    if target is None:
                        logger.debug(f"Dropping dangling {node.collection} reference {value!r} in '{node.field}' of {doc.get('id')}")
                        continue
                    # each occurrence gets its own copy so nested resolution stays independent
                    resolved.append(dict(target))
                doc[node.field] = resolved
                children.extend(resolved)
            else:
                key = _as_key(raw)
                target = targets.get(key) if key else None
                if target is None and raw is not None:
                    logger.debug(f"Dangling {node.collection} reference {raw!r} in '{node.field}' of {doc.get('id')}")
                doc[node.field] = dict(target) if target is not None else None
                if target is not None:
                    children.append(doc[node.field])

        if node.nested and children:
            self.resolve(children, node.nested)
