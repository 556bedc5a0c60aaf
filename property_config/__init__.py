"""
property_config -- single public entrypoint for the entity relationship graph.

Responsibility:
    Provides the runtime ``RelationshipGraph`` through
    ``get_relationship_graph()``: loads the shipped YAML, applies startup
    extensions through ``RelationshipGraphBuilder`` and returns the frozen
    result.  Components that need the graph receive it from the caller;
    nothing mutates a shared table at runtime.

Failure modes:
    - ``FileNotFoundError`` -- configuration file missing.
    - ``RelationshipConfigLoadError`` -- malformed configuration.
    - ``InvalidEdgeKindError`` -- an extension names an unknown edge list.

Audit relevance:
    Every call emits a ``PROPERTY_CONFIG_TRACE`` log entry with the source
    path, entity count and graph checksum.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from property_config.builder import RelationshipGraphBuilder
from property_config.loader import (
    compute_checksum,
    dump_graph_yaml,
    export_graph,
    load_graph_file,
    load_graph_from_dict,
)
from property_config.schema import EdgeKind, EntityDescriptor, RelationshipGraph

_logger = logging.getLogger("property_kernel.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "entity_relationships.yaml"

GraphExtension = Callable[[RelationshipGraphBuilder], object]


def get_relationship_graph(
    config_path: Path | None = None,
    extensions: Iterable[GraphExtension] = (),
) -> RelationshipGraph:
    """Load the relationship graph and apply startup extensions.

    Args:
        config_path: YAML file to load; defaults to the shipped graph.
        extensions: Builder steps run once, in order, before the graph is
            frozen, e.g. ``lambda b: b.register_relationship(
            "supplier", "owner", "relatedTo")``.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    graph = load_graph_file(path)

    extensions = list(extensions)
    if extensions:
        builder = RelationshipGraphBuilder(graph)
        for extend in extensions:
            extend(builder)
        graph = builder.build()

    _logger.info(
        "PROPERTY_CONFIG_TRACE",
        extra={
            "trace_type": "PROPERTY_CONFIG_TRACE",
            "config_path": str(path),
            "entity_count": len(graph),
            "extension_count": len(extensions),
            "checksum": compute_checksum(graph),
        },
    )
    return graph


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "EdgeKind",
    "EntityDescriptor",
    "GraphExtension",
    "RelationshipGraph",
    "RelationshipGraphBuilder",
    "compute_checksum",
    "dump_graph_yaml",
    "export_graph",
    "get_relationship_graph",
    "load_graph_from_dict",
]
