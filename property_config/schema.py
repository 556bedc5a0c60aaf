"""
Entity relationship graph schema.

Describes, for each entity kind, which kinds it inherits attributes from,
which it passes attributes down to, and which it is merely associated with.

Key distinction:
  inherits_from / inherits_to = attribute propagation.  A child's record
                                logically includes its parents' fields for
                                display and automation.
  related_to                  = association only (e.g. many-to-many
                                supplier links); no fields are merged.

The graph is an immutable configuration value.  Extensions are applied
through ``RelationshipGraphBuilder`` once at startup; see ``builder.py``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class EdgeKind(str, Enum):
    """Named edge lists of an entity descriptor."""

    INHERITS_FROM = "inheritsFrom"
    INHERITS_TO = "inheritsTo"
    RELATED_TO = "relatedTo"


@dataclass(frozen=True)
class EntityDescriptor:
    """Edges and owned attributes of one entity kind."""

    inherits_from: tuple[str, ...] = ()
    inherits_to: tuple[str, ...] = ()
    related_to: tuple[str, ...] = ()
    attributes: tuple[str, ...] = ()

    def edges(self, edge_kind: EdgeKind) -> tuple[str, ...]:
        if edge_kind is EdgeKind.INHERITS_FROM:
            return self.inherits_from
        if edge_kind is EdgeKind.INHERITS_TO:
            return self.inherits_to
        return self.related_to


@dataclass(frozen=True)
class RelationshipGraph:
    """
    Read-only mapping from entity kind to ``EntityDescriptor``.

    Unknown kinds are never an error: they have no relationships and no
    inherited attributes.
    """

    entities: Mapping[str, EntityDescriptor] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entities", MappingProxyType(dict(self.entities)))

    def __contains__(self, kind: object) -> bool:
        return kind in self.entities

    def __iter__(self) -> Iterator[str]:
        return iter(self.entities)

    def __len__(self) -> int:
        return len(self.entities)

    def kinds(self) -> tuple[str, ...]:
        return tuple(self.entities)

    def get(self, kind: str) -> EntityDescriptor | None:
        return self.entities.get(kind)

    def are_related(self, source_kind: str, target_kind: str) -> bool:
        """
        True iff ``target_kind`` is on any edge list of ``source_kind``.

        Directional: ``are_related(a, b)`` says nothing about
        ``are_related(b, a)``.
        """
        source = self.entities.get(source_kind)
        if source is None:
            return False
        return (
            target_kind in source.related_to
            or target_kind in source.inherits_from
            or target_kind in source.inherits_to
        )

    def collect_inherited_attributes(self, entity_kind: str) -> frozenset[str]:
        """
        Attributes of every ancestor reachable through ``inherits_from``.

        Each ancestor is expanded once, so a cycle in the configuration
        terminates instead of recursing forever.
        """
        entity = self.entities.get(entity_kind)
        if entity is None:
            return frozenset()

        collected: set[str] = set()
        visited: set[str] = set()
        pending = list(reversed(entity.inherits_from))
        while pending:
            parent_kind = pending.pop()
            if parent_kind in visited:
                continue
            visited.add(parent_kind)
            parent = self.entities.get(parent_kind)
            if parent is None:
                continue
            collected.update(parent.attributes)
            pending.extend(reversed(parent.inherits_from))
        return frozenset(collected)

    def inheritance_chain(self, entity_kind: str) -> tuple[str, ...]:
        """Ancestor kinds in depth-first order, each listed once."""
        entity = self.entities.get(entity_kind)
        if entity is None:
            return ()

        chain: list[str] = []
        pending = list(reversed(entity.inherits_from))
        while pending:
            parent_kind = pending.pop()
            if parent_kind in chain:
                continue
            chain.append(parent_kind)
            parent = self.entities.get(parent_kind)
            if parent is not None:
                pending.extend(reversed(parent.inherits_from))
        return tuple(chain)
