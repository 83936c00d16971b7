# File: script_scout/report/__init__.py
"""script_scout.report: Сохранение отчётов (JSON и HTML), используемое CLI и тестами."""

from .html_report import render_html
from .json_report import render_json

__all__ = ["render_json", "render_html"]
