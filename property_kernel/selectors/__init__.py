"""Read-only query selectors."""

from property_kernel.selectors.base import BaseSelector
from property_kernel.selectors.base_parameters_selector import BaseParametersSelector

__all__ = [
    "BaseSelector",
    "BaseParametersSelector",
]
