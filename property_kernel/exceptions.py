"""
Typed Exception Hierarchy for the Property Kernel.

Every error is a typed class with a class-level ``code`` attribute
(machine-readable, API-safe) and carries its context as attributes rather
than only in the message string.  Callers catch by type, never by message.

    try:
        params = get_active_base_parameters(source)
    except NoActiveBaseParametersError as e:
        log.warning("no_active_parameters", extra={"code": e.code})

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    PropertyKernelError (base)
    |
    +-- BaseParametersError
    |   +-- NoActiveBaseParametersError
    |   +-- BaseParametersNotFoundError
    |   +-- MissingCurrencyRateError
    |
    +-- IndexationError
    |   +-- InvalidIndexationError
    |
    +-- RelationshipConfigError
        +-- InvalidEdgeKindError
        +-- RelationshipConfigLoadError

===============================================================================
ERROR CODES
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Parameters      | NO_ACTIVE_BASE_PARAMETERS   | No parameter record is marked active
                | BASE_PARAMETERS_NOT_FOUND   | Record ID doesn't exist
                | MISSING_CURRENCY_RATE       | Record carries no rate for a currency
----------------|-----------------------------|-----------------------------------------
Indexation      | INVALID_INDEXATION          | Negative base index or custom rate
----------------|-----------------------------|-----------------------------------------
Relationships   | INVALID_EDGE_KIND           | Edge kind not inheritsFrom/To, relatedTo
                | RELATIONSHIP_CONFIG_INVALID | Malformed relationship configuration
"""


class PropertyKernelError(Exception):
    """
    Base exception for all property kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PROPERTY_KERNEL_ERROR"


# Base parameter exceptions


class BaseParametersError(PropertyKernelError):
    """Base exception for base-parameter errors."""

    code: str = "BASE_PARAMETERS_ERROR"


class NoActiveBaseParametersError(BaseParametersError):
    """No base-parameter record is marked active."""

    code: str = "NO_ACTIVE_BASE_PARAMETERS"

    def __init__(self, records_seen: int = 0):
        self.records_seen = records_seen
        super().__init__(
            f"No active base parameters found ({records_seen} record(s) listed)"
        )


class BaseParametersNotFoundError(BaseParametersError):
    """Base-parameter record with given ID was not found."""

    code: str = "BASE_PARAMETERS_NOT_FOUND"

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Base parameters not found: {record_id}")


class MissingCurrencyRateError(BaseParametersError):
    """Base-parameter record carries no rate for the requested currency."""

    code: str = "MISSING_CURRENCY_RATE"

    def __init__(self, currency: str, record_id: str | None = None):
        self.currency = currency
        self.record_id = record_id
        super().__init__(f"No {currency} rate in base parameters {record_id or '<unsaved>'}")


# Indexation exceptions


class IndexationError(PropertyKernelError):
    """Base exception for indexation errors."""

    code: str = "INDEXATION_ERROR"


class InvalidIndexationError(IndexationError):
    """Indexation policy carries an invalid value."""

    code: str = "INVALID_INDEXATION"

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid indexation {field}: {value}")


# Relationship configuration exceptions


class RelationshipConfigError(PropertyKernelError):
    """Base exception for entity relationship configuration errors."""

    code: str = "RELATIONSHIP_CONFIG_ERROR"


class InvalidEdgeKindError(RelationshipConfigError):
    """Edge kind is not one of the supported relationship lists."""

    code: str = "INVALID_EDGE_KIND"

    def __init__(self, edge_kind: str):
        self.edge_kind = edge_kind
        super().__init__(
            f"Invalid edge kind: {edge_kind!r} "
            "(expected inheritsFrom, inheritsTo or relatedTo)"
        )


class RelationshipConfigLoadError(RelationshipConfigError):
    """Relationship configuration could not be parsed."""

    code: str = "RELATIONSHIP_CONFIG_INVALID"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid relationship configuration in {source}: {reason}")
