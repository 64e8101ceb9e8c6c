"""
Spreadsheet export of bill listings.

Read-only: builds an in-memory workbook from already stored bills.
"""

from io import BytesIO
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font

from ..models import Bill

EXPORT_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

COLUMNS = [
    ('Date', 'date'),
    ('Bill number', 'bill_number'),
    ('Quota number', 'quota_number'),
    ('Owner name', 'owner_name'),
    ('License plate', 'license_plate'),
    ('Cane type', 'sugarcane_type'),
    ('Weight (t)', 'weight'),
    ('Price per unit', 'price_per_unit'),
    ('Total amount', 'total_amount'),
    ('Fuel cost', 'fuel_cost'),
    ('Net amount', 'net_amount'),
]


def _cell_value(bill: Bill, field: str):
    if field == 'sugarcane_type':
        return bill.get_sugarcane_type_display()
    value = getattr(bill, field)
    return value if value != '' else None


def export_bills_xlsx(bills: Iterable[Bill]) -> bytes:
    """
    Render bills as an .xlsx workbook.

    Args:
        bills: Bills in display order

    Returns:
        Workbook file content
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = 'Bills'

    sheet.append([header for header, _ in COLUMNS])
    for cell in sheet[1]:
        cell.font = Font(bold=True)

    for bill in bills:
        sheet.append([_cell_value(bill, field) for _, field in COLUMNS])

    sheet.freeze_panes = 'A2'

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
