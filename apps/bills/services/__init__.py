"""Bills app services layer."""

from .exceptions import (
    BillServiceError,
    BillNotFoundError,
    DuplicateBillNumberError,
    InvalidBillDataError,
)
from .bill_management import (
    bill_number_exists,
    create_bill,
    get_bill,
    update_bill,
    delete_bill,
)
from .bill_search import filter_bills
from .bill_export import export_bills_xlsx, EXPORT_CONTENT_TYPE

__all__ = [
    # Exceptions
    'BillServiceError',
    'BillNotFoundError',
    'DuplicateBillNumberError',
    'InvalidBillDataError',
    # Management
    'bill_number_exists',
    'create_bill',
    'get_bill',
    'update_bill',
    'delete_bill',
    # Search & export
    'filter_bills',
    'export_bills_xlsx',
    'EXPORT_CONTENT_TYPE',
]
