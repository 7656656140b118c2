"""Value objects for the sqlitepp domain.

Exports:
    - FieldType: Storage class of a field (INTEGER, FLOAT, TEXT, BLOB, NULL)
    - ResultCode: Engine status codes returned by statement execution
    - TransactionState: Scoped transaction lifecycle states
"""

from sqlitepp.domain.value_objects.field_types import FieldType
from sqlitepp.domain.value_objects.result_codes import ResultCode
from sqlitepp.domain.value_objects.transaction_types import TransactionState

__all__ = [
    "FieldType",
    "ResultCode",
    "TransactionState",
]
