# File: privacy_scout/report/__init__.py
"""privacy_scout.report: сохранение отчётов, используемое CLI и тестами."""

from .json_report import render_json

__all__ = ["render_json"]
