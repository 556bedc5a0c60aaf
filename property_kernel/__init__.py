"""
Property Kernel

Shared foundation for the property-management core:
- Typed exceptions with machine-readable codes
- Structured JSON logging
- Domain values for contracts, payments and base parameters
- Persistence of base-parameter records
"""

__version__ = "0.1.0"
