"""Export-Modul: Protokolldatei, Konsole, Excel (openpyxl) und PDF (fpdf2)."""

from export.excel_export import ExcelExporter
from export.pdf_export import PdfExporter
from export.log_writer import write_log, render_log, log_filename

__all__ = ["ExcelExporter", "PdfExporter", "write_log", "render_log", "log_filename"]
