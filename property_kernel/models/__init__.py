"""ORM models for the property kernel."""

from property_kernel.models.base_parameters import BaseParametersRecord

__all__ = [
    "BaseParametersRecord",
]
