"""Report output adapters."""

from review_citations.adapters.report.json_report_writer import JsonReportWriter

__all__ = ["JsonReportWriter"]
