"""
property_engines.tracer -- Engine invocation tracer emitting PROPERTY_ENGINE_TRACE.

Responsibility:
    Provide a lightweight decorator (``@traced_engine``) that wraps engine
    invocations with structured trace logging.  The trace captures
    engine_name, engine_version, input_fingerprint (deterministic SHA-256
    hash of selected inputs), and duration_ms.

Invariants enforced:
    - Fingerprint computation is deterministic: _canonicalize produces
      stable string representations; dict keys are sorted; the hash is
      SHA-256 truncated to 16 hex chars.
    - The decorator only reads arguments and emits a log record; it does
      not mutate inputs.

Failure modes:
    - Fingerprint fields that are neither passed as keyword arguments nor
      bound positionally are recorded as "null".

Usage:
    from property_engines.tracer import traced_engine

    @traced_engine("indexation", "1.0", fingerprint_fields=("payment", "contract"))
    def compute(self, payment, contract):
        ...
"""

from __future__ import annotations

import dataclasses
import functools
import hashlib
import inspect
import logging
import time
from collections.abc import Callable
from typing import Any

_logger = logging.getLogger("property_kernel.engines.tracer")


def _canonicalize(value: Any) -> str:
    """Produce a stable string representation of a value for fingerprinting."""
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        items = sorted(value.items())
        return "{" + ",".join(f"{k}:{_canonicalize(v)}" for k, v in items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_canonicalize(v) for v in value) + "]"
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        return type(value).__name__ + _canonicalize(fields)
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: dict[str, Any],
) -> str:
    """Compute a deterministic SHA-256 fingerprint of selected input fields.

    Missing fields are recorded as "null".  The result is a 16-character
    hex digest prefix.
    """
    parts: list[str] = []
    for field in fingerprint_fields:
        val = arguments.get(field)
        parts.append(f"{field}={_canonicalize(val)}")
    canonical = "|".join(parts)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """Decorator that emits PROPERTY_ENGINE_TRACE for engine invocations.

    Args:
        engine_name: Engine identifier (e.g., "indexation").
        engine_version: Engine version (e.g., "1.0").
        fingerprint_fields: Argument names to include in the input
            fingerprint hash.

    Returns:
        Decorator function.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fp = ""
            if fingerprint_fields:
                bound = signature.bind_partial(*args, **kwargs)
                fp = compute_input_fingerprint(fingerprint_fields, dict(bound.arguments))

            t0 = time.monotonic()
            result = func(*args, **kwargs)
            duration_ms = round((time.monotonic() - t0) * 1000, 2)

            _logger.info(
                "PROPERTY_ENGINE_TRACE",
                extra={
                    "trace_type": "PROPERTY_ENGINE_TRACE",
                    "engine_name": engine_name,
                    "engine_version": engine_version,
                    "input_fingerprint": fp,
                    "duration_ms": duration_ms,
                    "function": func.__qualname__,
                },
            )
            return result

        return wrapper

    return decorator
