"""Excel-Export für das Allokationsergebnis (openpyxl)."""

import re
from pathlib import Path

from models.placement import Placement
from models.schedule_data import ScheduleData
from solver.allocator import AllocationResult

from export.helpers import (
    COLORS, build_grid, format_placement, get_course_color, hours_per_day, today_str,
)

_INVALID_SHEET_CHARS = re.compile(r"[\\/?*\[\]:]")


def _sheet_title(prefix: str, name: str) -> str:
    """Excel erlaubt max. 31 Zeichen und keine \\ / ? * [ ] :"""
    return _INVALID_SHEET_CHARS.sub("_", f"{prefix} {name}")[:31]


class ExcelExporter:
    """Exportiert ein AllocationResult: Übersicht + ein Blatt je Lehrkraft und Raum."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_SLOT_W = 14
    COL_DAY_W  = 22

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22
    ROW_SLOT_H   = 36

    def __init__(self, result: AllocationResult, data: ScheduleData):
        self.result = result
        self.data   = data
        self.config = data.config

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> None:
        """Erstellt die Excel-Datei mit allen Sheets."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_uebersicht(wb)

        for teacher in sorted(self.data.teachers, key=lambda t: t.name):
            entries = self.result.get_teacher_schedule(teacher.name)
            if entries:
                ws = wb.create_sheet(title=_sheet_title("L", teacher.name))
                self._write_grid(ws, entries, mode="teacher")

        for room in sorted(self.data.rooms, key=lambda r: r.name):
            entries = self.result.get_room_schedule(room.name)
            if entries:
                ws = wb.create_sheet(title=_sheet_title("R", room.name))
                self._write_grid(ws, entries, mode="room")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _header_cell(self, ws, row: int, col: int, text: str) -> None:
        from openpyxl.styles import Font
        cell = ws.cell(row=row, column=col, value=text)
        cell.fill = self._fill(COLORS["header"])
        cell.font = Font(bold=True, color="FFFFFF", size=10)
        cell.alignment = self._center_align(wrap=False)
        cell.border = self._thin_border()

    # ─── Raster ───────────────────────────────────────────────────────────────

    def _write_grid(self, ws, entries: list[Placement], mode: str) -> None:
        """Slots als Zeilen, Tage als Spalten."""
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        days = self.result.days
        slots = self.result.time_slots
        grid = build_grid(entries, days, slots)
        border = self._thin_border()

        ws.column_dimensions["A"].width = self.COL_SLOT_W
        for col in range(2, 2 + len(days)):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W

        self._header_cell(ws, 1, 1, "Slot")
        for col, day in enumerate(days, 2):
            self._header_cell(ws, 1, col, day)
        ws.row_dimensions[1].height = self.ROW_HEADER_H

        for row, slot in enumerate(slots, 2):
            c = ws.cell(row=row, column=1, value=slot)
            c.alignment = self._center_align(wrap=False)
            c.border = border
            c.font = Font(bold=True, size=9)
            for col, day in enumerate(days, 2):
                here = grid.get((day, slot), [])
                c = ws.cell(
                    row=row, column=col,
                    value="\n".join(format_placement(p, mode) for p in here),
                )
                c.fill = self._fill(get_course_color(here[0].course_type) if here else COLORS["free"])
                c.alignment = self._center_align()
                c.border = border
                c.font = Font(size=8)
            ws.row_dimensions[row].height = self.ROW_SLOT_H

    # ─── Sheet: Übersicht ─────────────────────────────────────────────────────

    def _sheet_uebersicht(self, wb) -> None:
        from openpyxl.styles import Font
        ws = wb.create_sheet(title="Übersicht", index=0)

        row = 1
        ws.cell(row=row, column=1, value=self.config.institution_name).font = Font(bold=True, size=14)
        row += 1
        ws.cell(row=row, column=1, value=f"Erstellt: {today_str()}")
        ws.cell(row=row, column=3, value=f"Placements: {len(self.result.placements)}")
        if self.result.period:
            ws.cell(row=row, column=5, value=f"Zeitraum: {self.result.period}")
        row += 2

        headers = ["Kurs", "Typ", "Lehrkraft", "Bedarf", "Geplant", "Offen"]
        for col, text in enumerate(headers, 1):
            self._header_cell(ws, row, col, text)
        row += 1

        border = self._thin_border()
        for cdef in self.data.courses:
            planned = sum(p.duration for p in self.result.get_course_schedule(cdef.name))
            unmet = self.result.unmet_hours.get(cdef.name, 0)
            values = [cdef.name, cdef.course_type or "", cdef.teacher,
                      cdef.total_hours, planned, unmet]
            for col, value in enumerate(values, 1):
                c = ws.cell(row=row, column=col, value=value)
                c.border = border
                if unmet and col == 6:
                    c.font = Font(bold=True, color="CC0000")
            row += 1

        row += 1
        self._header_cell(ws, row, 1, "Lehrkraft")
        self._header_cell(ws, row, 2, "Max/Tag")
        self._header_cell(ws, row, 3, "Stunden")
        self._header_cell(ws, row, 4, "Max. Tageslast")
        row += 1
        for teacher in self.data.teachers:
            per_day = hours_per_day(self.result.get_teacher_schedule(teacher.name))
            values = [teacher.name, teacher.max_hours_per_week,
                      sum(per_day.values()), max(per_day.values(), default=0)]
            for col, value in enumerate(values, 1):
                ws.cell(row=row, column=col, value=value).border = border
            row += 1

        for col, width in zip("ABCDEF", (22, 12, 16, 10, 10, 10)):
            ws.column_dimensions[col].width = width
