"""
Relationship configuration loader (``property_config.loader``).

Responsibility
--------------
Loads the entity relationship YAML and parses it into a frozen
``RelationshipGraph``; exports a graph back to the same mapping shape for
the import/export screen.  The runtime entry point is
``property_config.get_relationship_graph()``.

File shape
----------
::

    contract:
      inheritsFrom: [property]
      inheritsTo: [tenant, payment, guarantee]
      relatedTo: [property, tenant]
      attributes: [start_date, end_date]

Every key is optional; a missing edge list is empty.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrong shape (non-mapping entry, non-string names, unknown keys)
  -> ``RelationshipConfigLoadError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from property_config.schema import EdgeKind, EntityDescriptor, RelationshipGraph
from property_kernel.exceptions import RelationshipConfigLoadError

ATTRIBUTES_KEY = "attributes"
_ALLOWED_KEYS = frozenset({e.value for e in EdgeKind} | {ATTRIBUTES_KEY})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _names(value: Any, source: str, where: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise RelationshipConfigLoadError(source, f"{where} must be a list of strings")
    return tuple(value)


def parse_entity(kind: str, data: Any, source: str = "<dict>") -> EntityDescriptor:
    """Parse one entity entry."""
    if data is None:
        return EntityDescriptor()
    if not isinstance(data, dict):
        raise RelationshipConfigLoadError(source, f"entry {kind!r} must be a mapping")
    unknown = set(data) - _ALLOWED_KEYS
    if unknown:
        raise RelationshipConfigLoadError(
            source, f"entry {kind!r} has unknown keys: {', '.join(sorted(unknown))}"
        )
    return EntityDescriptor(
        inherits_from=_names(data.get(EdgeKind.INHERITS_FROM.value), source, f"{kind}.inheritsFrom"),
        inherits_to=_names(data.get(EdgeKind.INHERITS_TO.value), source, f"{kind}.inheritsTo"),
        related_to=_names(data.get(EdgeKind.RELATED_TO.value), source, f"{kind}.relatedTo"),
        attributes=_names(data.get(ATTRIBUTES_KEY), source, f"{kind}.attributes"),
    )


def load_graph_from_dict(data: Any, source: str = "<dict>") -> RelationshipGraph:
    """
    Parse a ``RelationshipGraph`` from the exported mapping shape.

    Raises:
        RelationshipConfigLoadError: if the mapping is malformed.
    """
    if not isinstance(data, dict):
        raise RelationshipConfigLoadError(source, "top level must be a mapping")
    entities: dict[str, EntityDescriptor] = {}
    for kind, entry in data.items():
        if not isinstance(kind, str):
            raise RelationshipConfigLoadError(source, f"entity kind {kind!r} must be a string")
        entities[kind] = parse_entity(kind, entry, source)
    return RelationshipGraph(entities)


def load_graph_file(path: Path) -> RelationshipGraph:
    return load_graph_from_dict(load_yaml_file(path), source=str(path))


def export_graph(graph: RelationshipGraph) -> dict[str, dict[str, list[str]]]:
    """Mapping shape accepted by ``load_graph_from_dict``; edge lists that are empty are omitted."""
    exported: dict[str, dict[str, list[str]]] = {}
    for kind, entity in graph.entities.items():
        entry: dict[str, list[str]] = {}
        for edge_kind in EdgeKind:
            edges = entity.edges(edge_kind)
            if edges:
                entry[edge_kind.value] = list(edges)
        entry[ATTRIBUTES_KEY] = list(entity.attributes)
        exported[kind] = entry
    return exported


def dump_graph_yaml(graph: RelationshipGraph) -> str:
    return yaml.safe_dump(export_graph(graph), sort_keys=False, allow_unicode=True)


def compute_checksum(graph: RelationshipGraph) -> str:
    """
    Deterministic SHA-256 of the graph's canonical JSON form.

    Entity order does not matter; edge and attribute order does.
    """
    canonical = json.dumps(export_graph(graph), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
