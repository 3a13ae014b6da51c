"""
Excel export of reservations and daily statistics.
"""

import io

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

RESERVATION_HEADERS = [
    ('Date', 'reservation_date', 12),
    ('Time', 'reservation_time', 8),
    ('Customer Name', 'customer_name', 24),
    ('Email', 'email', 28),
    ('Phone', 'phone', 16),
    ('Party Size', 'party_size', 10),
    ('Status', 'status', 12),
    ('Attendance', 'attendance', 12),
    ('Preference', 'communication_preference', 12),
    ('Special Requests', 'special_requests', 32),
    ('Created At', 'created_at', 22),
    ('Attendance Marked At', 'attendance_marked_at', 22),
    ('Attendance Marked By', 'attendance_marked_by', 18),
]

DAILY_HEADERS = [
    ('Date', 'date', 12),
    ('Total Reservations', 'count', 18),
    ('Confirmed', 'confirmed', 12),
    ('Pending', 'pending', 12),
    ('Declined', 'declined', 12),
    ('Attended', 'attended', 12),
    ('No Shows', 'no_show', 12),
    ('Total Guests', 'total_guests', 14),
    ('Attendance Rate %', 'attendance_rate', 18),
]

HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)
HEADER_FILL = PatternFill(start_color="8B1E3F", end_color="8B1E3F", fill_type="solid")
HEADER_ALIGNMENT = Alignment(horizontal="center", vertical="center", wrap_text=True)
ALT_FILL = PatternFill(start_color="F5F5F5", end_color="F5F5F5", fill_type="solid")
THIN_BORDER = Border(
    left=Side(style='thin', color="D4D4D4"),
    right=Side(style='thin', color="D4D4D4"),
    top=Side(style='thin', color="D4D4D4"),
    bottom=Side(style='thin', color="D4D4D4")
)


def _write_sheet(ws, title: str, headers: list, rows: list, empty_values: dict = None) -> None:
    """Title on row 1, headers on row 3, data from row 4."""
    empty_values = empty_values or {}

    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(headers))
    title_cell = ws.cell(row=1, column=1, value=title)
    title_cell.font = Font(bold=True, size=14, color="8B1E3F")
    title_cell.alignment = Alignment(horizontal="center", vertical="center")

    header_row = 3
    for col, (label, _, width) in enumerate(headers, 1):
        cell = ws.cell(row=header_row, column=col, value=label)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGNMENT
        cell.border = THIN_BORDER
        ws.column_dimensions[get_column_letter(col)].width = width

    # Freeze header row
    ws.freeze_panes = f'A{header_row + 1}'

    for row_idx, row in enumerate(rows, header_row + 1):
        is_alt = (row_idx - header_row) % 2 == 0
        for col, (_, key, _) in enumerate(headers, 1):
            value = row.get(key)
            if value in (None, ''):
                value = empty_values.get(key, '')
            cell = ws.cell(row=row_idx, column=col, value=value)
            cell.border = THIN_BORDER
            if is_alt:
                cell.fill = ALT_FILL


def build_reservations_workbook(reservations: list, daily_stats: list, restaurant: str) -> io.BytesIO:
    """
    Build the reservations export.

    Args:
        reservations: Reservation dicts, in the order they should appear
        daily_stats: Output of models.analytics.get_daily_stats
        restaurant: Restaurant name for the sheet titles

    Returns:
        BytesIO positioned at 0 holding the .xlsx file
    """
    wb = Workbook()

    ws = wb.active
    ws.title = "Reservations"
    _write_sheet(
        ws, f"{restaurant} - Reservations ({len(reservations)})",
        RESERVATION_HEADERS, reservations,
        empty_values={'attendance': 'Not Marked'}
    )

    _write_sheet(
        wb.create_sheet("Daily Stats"), f"{restaurant} - Daily Statistics",
        DAILY_HEADERS, daily_stats
    )

    output = io.BytesIO()
    wb.save(output)
    wb.close()
    output.seek(0)
    return output
