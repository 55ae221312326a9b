"""JSON report writer."""

import json
import sys
from pathlib import Path
from typing import Optional

from review_citations.core import AggregateReport, ReportWriteError


class JsonReportWriter:
    """Write the aggregate report as a single JSON document."""

    def render(self, report: AggregateReport) -> str:
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)

    def write(self, report: AggregateReport, output_path: Optional[Path] = None) -> None:
        """Write the report to ``output_path``, or stdout when it is None or ``-``."""
        content = self.render(report)

        if output_path is None or str(output_path) == "-":
            sys.stdout.write(content)
            return

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ReportWriteError(f"Cannot write report to {output_path}: {e}") from e
