"""Kernel services."""

from property_kernel.services.base_parameters_service import (
    BaseParametersService,
    BaseParametersSource,
    InMemoryBaseParametersSource,
    get_active_base_parameters,
)

__all__ = [
    "BaseParametersService",
    "BaseParametersSource",
    "InMemoryBaseParametersSource",
    "get_active_base_parameters",
]
