from __future__ import annotations

"""Assessment report generation.

Two formats are produced from the same inputs: a CSV export built in memory
(:func:`build_csv_report`) and a PDF written to ``settings.REPORTS_DIR``
(:meth:`ReportGenerator.generate_pdf_report`).  Scores are always supplied
by the caller; nothing here recalculates them.
"""

import csv
import io
import logging
import re
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from cmmc_tracker.catalog import dod_weight, get_control
from cmmc_tracker.config import settings
from cmmc_tracker.models.assessment import Assessment
from cmmc_tracker.models.response import ControlResponse
from cmmc_tracker.reports.pdf import PDFRenderer
from cmmc_tracker.scoring import (
    CompletionStats,
    ControlGap,
    DomainCompliance,
    ScopingRecord,
    SprsScore,
    build_scoping_map,
    is_in_scope,
)

logger = logging.getLogger(__name__)

_MODULE_DIR = Path(__file__).parent
_TEMPLATES_DIR = _MODULE_DIR / "templates"
_STYLES_DIR = _MODULE_DIR / "styles"

CSV_HEADER: tuple[str, ...] = (
    "Control ID",
    "Status",
    "In Scope",
    "DoD Value",
    "Implementation Notes",
    "Last Updated",
)


def _slugify(text: str) -> str:
    """Convert *text* to a filesystem-safe lowercase slug.

    Example::

        >>> _slugify("CMMC Level 2 Assessment")
        'cmmc-level-2-assessment'
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or "assessment"


def _status_label(response: ControlResponse) -> str:
    return response.status.value if response.status is not None else ""


def report_filename(assessment: Assessment, extension: str) -> str:
    """Download filename for *assessment*, e.g. ``cmmc-level-2-assessment.csv``."""
    return f"{_slugify(assessment.name)}.{extension}"


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------


def build_csv_report(
    assessment: Assessment,
    responses: Sequence[ControlResponse],
    scoping_decisions: Sequence[ScopingRecord],
    sprs: SprsScore | None = None,
) -> str:
    """Render an assessment as CSV.

    One row per stored response, followed by a blank line and the assessment
    summary.  When *sprs* is given (Level 2 only) an SPRS summary block is
    appended.

    Args:
        assessment: The assessment being exported.
        responses: Its stored responses.
        scoping_decisions: Its scoping decisions as engine records.
        sprs: Optional SPRS result to include.

    Returns:
        The CSV document as a string.
    """
    scoping_map = build_scoping_map(scoping_decisions)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow(CSV_HEADER)
    for response in responses:
        writer.writerow(
            [
                response.control_id,
                _status_label(response),
                "Yes" if is_in_scope(response.control_id, scoping_map) else "No",
                dod_weight(response.control_id),
                response.notes or "",
                response.updated_at.isoformat() if response.updated_at else "",
            ]
        )

    writer.writerow([])
    writer.writerow(["Assessment Name", assessment.name])
    writer.writerow(["Organization", assessment.organization_name])
    writer.writerow(["Level", assessment.level.value])
    writer.writerow(["Completion", f"{assessment.completed_percentage}%"])

    if sprs is not None:
        writer.writerow([])
        writer.writerow(["SPRS Score Summary"])
        writer.writerow(["SPRS Score", sprs.sprs_score])
        writer.writerow(["Implementation Factor", sprs.implementation_factor])
        writer.writerow(["Implementation Level", sprs.implementation_level])

    return buffer.getvalue()


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------


class ReportGenerator:
    """Build the template context for an assessment and render it to PDF."""

    def __init__(self, reports_dir: Path | None = None) -> None:
        self._renderer = PDFRenderer(templates_dir=_TEMPLATES_DIR, styles_dir=_STYLES_DIR)
        self._reports_dir = Path(reports_dir or settings.REPORTS_DIR).resolve()

    def build_report_data(
        self,
        assessment: Assessment,
        responses: Sequence[ControlResponse],
        scoping_decisions: Sequence[ScopingRecord],
        completion: CompletionStats,
        domains: Sequence[DomainCompliance],
        gaps: Sequence[ControlGap],
        sprs: SprsScore | None = None,
    ) -> dict[str, Any]:
        """Flatten the assessment and its scores into the template context."""
        scoping_map = build_scoping_map(scoping_decisions)
        controls = []
        for response in responses:
            control = get_control(assessment.level, response.control_id)
            controls.append(
                {
                    "control_id": response.control_id,
                    "name": control.name if control is not None else "",
                    "status": _status_label(response) or "not assessed",
                    "in_scope": is_in_scope(response.control_id, scoping_map),
                    "dod_weight": dod_weight(response.control_id),
                    "notes": response.notes or "",
                }
            )

        return {
            "assessment_name": assessment.name,
            "organization_name": assessment.organization_name,
            "level": assessment.level.value,
            "generated_at": datetime.now(tz=UTC).strftime("%Y-%m-%d %H:%M UTC"),
            "completion": completion,
            "sprs": sprs,
            "domains": list(domains),
            "gaps": list(gaps),
            "controls": controls,
        }

    def render_html(self, report_data: dict[str, Any]) -> str:
        return self._renderer.render_report_html(report_data)

    def generate_pdf_report(self, assessment: Assessment, report_data: dict[str, Any]) -> Path:
        """Render *report_data* to ``<REPORTS_DIR>/<slug>-<id>.pdf``.

        WeasyPrint is synchronous; async callers should run this in a thread.
        """
        html = self.render_html(report_data)
        output_path = self._reports_dir / f"{_slugify(assessment.name)}-{assessment.id}.pdf"
        logger.info("Generating PDF report for assessment %s", assessment.id)
        return self._renderer.generate_pdf(html, output_path)
