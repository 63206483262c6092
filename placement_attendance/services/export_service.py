"""
Attendance export to CSV and Excel
"""

import csv
import io
import re
from typing import Any, Dict, List

import pandas as pd

DEFAULT_COLUMNS = [
    'name', 'email', 'rollNumber', 'universityRollNo', 'branch', 'year',
    'phoneNumber', 'attendanceCount', 'lastAttendanceAt',
]

class ExportService:
    """Builds attendance downloads from the rows of ``get_event_attendance``"""

    @staticmethod
    def columns_for(rows: List[Dict[str, Any]]) -> List[str]:
        """Header keys come from the first row, in its insertion order"""
        return list(rows[0].keys()) if rows else list(DEFAULT_COLUMNS)

    @staticmethod
    def _frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
        # object dtype keeps ints as ints when a column also holds None
        return pd.DataFrame(rows, columns=ExportService.columns_for(rows), dtype=object)

    @staticmethod
    def to_csv(rows: List[Dict[str, Any]]) -> str:
        """Bare header line, then every data field quoted with embedded quotes doubled"""
        header = ','.join(ExportService.columns_for(rows))
        if not rows:
            return header
        body = ExportService._frame(rows).to_csv(
            index=False,
            header=False,
            quoting=csv.QUOTE_ALL,
            lineterminator='\n',
            na_rep='',
        )
        return header + '\n' + (body[:-1] if body.endswith('\n') else body)

    @staticmethod
    def to_excel(rows: List[Dict[str, Any]]) -> bytes:
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            ExportService._frame(rows).to_excel(writer, index=False, sheet_name='Attendance')
        return buffer.getvalue()

    @staticmethod
    def filename_for(event_name: str, extension: str = 'csv') -> str:
        safe = re.sub(r'[^a-z0-9\-_]+', '_', event_name or '', flags=re.IGNORECASE)
        return f"{safe}_attendance.{extension}"
