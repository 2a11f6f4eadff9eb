"""Report sink: 잔여 manifest → 텍스트 리포트."""

from .text import format_entry, format_header, format_report, write_report

__all__ = [
    "format_header",
    "format_entry",
    "format_report",
    "write_report",
]
