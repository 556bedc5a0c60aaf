"""
Module: property_kernel.selectors.base_parameters_selector
Responsibility: Read path for base-parameter records.  Implements the
    listing call consumed by ``get_active_base_parameters``.
Architecture position: Kernel > Selectors.
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select

from property_kernel.domain.base_parameters import BaseParameters
from property_kernel.exceptions import BaseParametersNotFoundError
from property_kernel.models.base_parameters import BaseParametersRecord
from property_kernel.selectors.base import BaseSelector


class BaseParametersSelector(BaseSelector[BaseParametersRecord]):
    """Lists base-parameter records as domain values, oldest first."""

    def list_parameters(self) -> Sequence[BaseParameters]:
        stmt = select(BaseParametersRecord).order_by(BaseParametersRecord.created_at)
        return [row.to_domain() for row in self.session.scalars(stmt)]

    def get(self, record_id: UUID | str) -> BaseParameters:
        """
        Raises:
            BaseParametersNotFoundError: if no record has ``record_id``.
        """
        key = record_id if isinstance(record_id, UUID) else UUID(str(record_id))
        row = self.session.get(BaseParametersRecord, key)
        if row is None:
            raise BaseParametersNotFoundError(str(record_id))
        return row.to_domain()
