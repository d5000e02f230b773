"""PDF-Export für das Allokationsergebnis (fpdf2)."""

from pathlib import Path

from models.placement import Placement
from models.schedule_data import ScheduleData
from solver.allocator import AllocationResult

from export.helpers import (
    COLORS, build_grid, format_placement, get_course_color, hex_to_rgb,
    hours_per_day, today_str,
)


def _pdf_safe(text: str) -> str:
    """Ersetzt nicht-latin-1-fähige Zeichen für fpdf2-Built-in-Fonts."""
    return (
        text
        .replace("—", " - ")   # em dash
        .replace("–", "-")      # en dash
        .replace("→", "->")     # Pfeil
    )


# ─── A4-Querformat-Dimensionen ────────────────────────────────────────────────
# Landscape A4: 297 × 210 mm, nutzbare Breite (Margin 10 links+rechts): 277 mm

_TABLE_W       = 277
_COL_SLOT_W    = 24
_MAX_DAYS_PAGE = 7     # Zeiträume werden in Blöcke zu 7 Tagen geteilt
_ROW_HEADER_H  = 7     # mm
_ROW_SLOT_H    = 18    # mm
_FONT_HEADER   = 8     # pt
_FONT_CONTENT  = 7     # pt
_LINE_H        = 3.5   # mm pro Zeile bei 7pt


class _SchedulePdf:
    """Interner Wrapper um fpdf.FPDF für Plan-Seiten."""

    def __init__(self, title: str):
        from fpdf import FPDF

        class _Pdf(FPDF):
            def __init__(inner, t):
                super().__init__(orientation="L", unit="mm", format="A4")
                inner._doc_title = t
                inner._entity_title = ""
                inner.alias_nb_pages()
                inner.set_auto_page_break(auto=True, margin=18)
                inner.set_margins(left=10, top=22, right=10)

            def header(inner):
                inner.set_font("Helvetica", "B", 11)
                inner.set_xy(10, 8)
                inner.cell(130, 7, _pdf_safe(inner._doc_title), border=0, align="L")
                inner.cell(0,   7, _pdf_safe(inner._entity_title), border=0, align="R")
                inner.ln(0)
                inner.set_draw_color(150, 150, 150)
                inner.line(10, 18, inner.w - 10, 18)

            def footer(inner):
                inner.set_y(-14)
                inner.set_font("Helvetica", "I", 7)
                inner.cell(
                    0, 8,
                    f"{today_str()}  |  Seite {inner.page_no()}/{{nb}}",
                    border=0, align="C",
                )

        self._pdf = _Pdf(title)

    def set_entity(self, title: str) -> None:
        self._pdf._entity_title = title

    def add_page(self) -> None:
        self._pdf.add_page()

    def save(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._pdf.output(str(path))

    def draw_cell(
        self,
        x: float, y: float,
        w: float, h: float,
        text: str = "",
        bg_hex: str | None = None,
        bold: bool = False,
        font_size: int = _FONT_CONTENT,
        text_color: tuple[int, int, int] = (0, 0, 0),
    ) -> None:
        """Zeichnet eine Zelle mit Hintergrund, Rand und zentriertem Text."""
        pdf = self._pdf

        if bg_hex:
            r, g, b = hex_to_rgb(bg_hex)
            pdf.set_fill_color(r, g, b)
            pdf.rect(x, y, w, h, style="F")

        pdf.set_draw_color(180, 180, 180)
        pdf.rect(x, y, w, h, style="D")

        if text:
            pdf.set_font("Helvetica", "B" if bold else "", font_size)
            pdf.set_text_color(*text_color)

            lines = [ln for ln in _pdf_safe(text).split("\n") if ln][:4]
            y_text = y + max(1.0, (h - len(lines) * _LINE_H) / 2)
            max_chars = max(4, int(w / 1.6))
            for line in lines:
                pdf.set_xy(x, y_text)
                pdf.cell(w, _LINE_H, line[:max_chars], border=0, align="C")
                y_text += _LINE_H

            pdf.set_text_color(0, 0, 0)


class PdfExporter:
    """Exportiert ein AllocationResult als PDF: eine Seite je Lehrkraft bzw. Raum."""

    def __init__(self, result: AllocationResult, data: ScheduleData):
        self.result = result
        self.data   = data
        self.config = data.config

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export_teacher_schedules(self, output_path: Path) -> None:
        pdf = _SchedulePdf(self.config.institution_name)
        for teacher in sorted(self.data.teachers, key=lambda t: t.name):
            entries = self.result.get_teacher_schedule(teacher.name)
            per_day = hours_per_day(entries)
            pdf.set_entity(
                f"{teacher.name} | Limit/Tag: {teacher.max_hours_per_week}h "
                f"| Ist: {sum(per_day.values())}h"
            )
            self._draw_pages(pdf, entries, mode="teacher")
        pdf.save(output_path)

    def export_room_schedules(self, output_path: Path) -> None:
        pdf = _SchedulePdf(self.config.institution_name)
        for room in sorted(self.data.rooms, key=lambda r: r.name):
            entries = self.result.get_room_schedule(room.name)
            pdf.set_entity(
                f"Raum {room.name} | {room.capacity} Plätze | {len(entries)} Termine"
            )
            self._draw_pages(pdf, entries, mode="room")
        pdf.save(output_path)

    # ─── Tabellenzeichnung ────────────────────────────────────────────────────

    def _draw_pages(self, pdf: _SchedulePdf, entries: list[Placement], mode: str) -> None:
        days = self.result.days or [""]
        for i in range(0, len(days), _MAX_DAYS_PAGE):
            pdf.add_page()
            self._draw_schedule(pdf, entries, days[i:i + _MAX_DAYS_PAGE], mode)

    def _draw_schedule(
        self, pdf: _SchedulePdf, entries: list[Placement], days: list[str], mode: str
    ) -> None:
        slots = self.result.time_slots
        grid = build_grid(entries, days, slots)
        day_w = (_TABLE_W - _COL_SLOT_W) / len(days)

        x = 10.0
        y = 22.0
        pdf.draw_cell(x, y, _COL_SLOT_W, _ROW_HEADER_H, "Slot",
                      bg_hex=COLORS["header"], bold=True,
                      font_size=_FONT_HEADER, text_color=(255, 255, 255))
        for i, day in enumerate(days):
            pdf.draw_cell(x + _COL_SLOT_W + i * day_w, y, day_w, _ROW_HEADER_H, day,
                          bg_hex=COLORS["header"], bold=True,
                          font_size=_FONT_HEADER, text_color=(255, 255, 255))
        y += _ROW_HEADER_H

        for slot in slots:
            pdf.draw_cell(x, y, _COL_SLOT_W, _ROW_SLOT_H, slot,
                          bold=True, font_size=_FONT_HEADER)
            for i, day in enumerate(days):
                here = grid.get((day, slot), [])
                color = get_course_color(here[0].course_type) if here else COLORS["free"]
                text = "\n".join(format_placement(p, mode) for p in here)
                pdf.draw_cell(x + _COL_SLOT_W + i * day_w, y, day_w, _ROW_SLOT_H,
                              text, bg_hex=color)
            y += _ROW_SLOT_H
