"""site_binder.report: запись итоговых артефактов (PDF и JSON)."""

from site_binder.report.json_report import render_json
from site_binder.report.pdf_report import render_pdf

__all__ = ["render_json", "render_pdf"]
