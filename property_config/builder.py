"""
RelationshipGraphBuilder -- startup extension of the relationship graph.

The shipped graph is immutable.  Deployments that need extra edges or
attributes register them on a builder seeded from the shipped graph and
build a new graph once, before anything reads it.

Registration rules:
    - Edges are idempotent: registering the same edge twice keeps one copy.
    - Attributes are appended as given, without de-duplication against the
      attributes the entity already owns.
    - An unknown source kind is created with empty edge lists.
"""

from __future__ import annotations

from collections.abc import Iterable

from property_config.schema import EdgeKind, EntityDescriptor, RelationshipGraph
from property_kernel.exceptions import InvalidEdgeKindError
from property_kernel.logging_config import get_logger

logger = get_logger("config.builder")


class _EntityDraft:
    """Mutable working copy of an ``EntityDescriptor``."""

    def __init__(self, descriptor: EntityDescriptor | None = None):
        descriptor = descriptor or EntityDescriptor()
        self.edges: dict[EdgeKind, list[str]] = {
            EdgeKind.INHERITS_FROM: list(descriptor.inherits_from),
            EdgeKind.INHERITS_TO: list(descriptor.inherits_to),
            EdgeKind.RELATED_TO: list(descriptor.related_to),
        }
        self.attributes: list[str] = list(descriptor.attributes)

    def freeze(self) -> EntityDescriptor:
        return EntityDescriptor(
            inherits_from=tuple(self.edges[EdgeKind.INHERITS_FROM]),
            inherits_to=tuple(self.edges[EdgeKind.INHERITS_TO]),
            related_to=tuple(self.edges[EdgeKind.RELATED_TO]),
            attributes=tuple(self.attributes),
        )


def parse_edge_kind(edge_kind: EdgeKind | str) -> EdgeKind:
    """
    Raises:
        InvalidEdgeKindError: if ``edge_kind`` names no edge list.
    """
    if isinstance(edge_kind, EdgeKind):
        return edge_kind
    try:
        return EdgeKind(edge_kind)
    except ValueError:
        raise InvalidEdgeKindError(str(edge_kind)) from None


class RelationshipGraphBuilder:
    """Collects registrations and produces an immutable ``RelationshipGraph``."""

    def __init__(self, base: RelationshipGraph | None = None):
        self._drafts: dict[str, _EntityDraft] = {}
        if base is not None:
            for kind, descriptor in base.entities.items():
                self._drafts[kind] = _EntityDraft(descriptor)

    def register_relationship(
        self,
        source_kind: str,
        target_kind: str,
        edge_kind: EdgeKind | str,
        attributes: Iterable[str] = (),
    ) -> RelationshipGraphBuilder:
        """
        Add ``target_kind`` to the ``edge_kind`` list of ``source_kind``.

        Raises:
            InvalidEdgeKindError: if ``edge_kind`` is not inheritsFrom,
                inheritsTo or relatedTo.
        """
        kind = parse_edge_kind(edge_kind)

        draft = self._drafts.get(source_kind)
        if draft is None:
            draft = self._drafts[source_kind] = _EntityDraft()

        edges = draft.edges[kind]
        if target_kind not in edges:
            edges.append(target_kind)

        added = list(attributes)
        draft.attributes.extend(added)

        logger.debug(
            "relationship_registered",
            extra={
                "source_kind": source_kind,
                "target_kind": target_kind,
                "edge_kind": kind.value,
                "attributes_added": added,
            },
        )
        return self

    def build(self) -> RelationshipGraph:
        return RelationshipGraph(
            {kind: draft.freeze() for kind, draft in self._drafts.items()}
        )
