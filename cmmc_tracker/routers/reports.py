from __future__ import annotations

import asyncio
from uuid import UUID

from fastapi import APIRouter, Depends, Response
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from cmmc_tracker.database import get_db
from cmmc_tracker.models.enums import AssessmentLevel
from cmmc_tracker.reports.generator import ReportGenerator, build_csv_report, report_filename
from cmmc_tracker.routers.assessments import get_assessment_or_404
from cmmc_tracker.services import scoring_service

router = APIRouter(prefix="/assessments/{assessment_id}/reports", tags=["reports"])


@router.get(
    "/csv",
    summary="Download the assessment as CSV",
    response_class=Response,
)
async def download_csv(
    assessment_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Export every response plus the assessment and SPRS summaries as CSV.

    Raises:
        HTTPException: 404 if the assessment does not exist.
    """
    assessment = await get_assessment_or_404(db, assessment_id)
    snapshot = await scoring_service.load_snapshot(db, assessment)

    sprs = None
    if assessment.level == AssessmentLevel.level2:
        sprs = await scoring_service.compute_sprs(db, assessment, snapshot=snapshot)

    content = build_csv_report(
        assessment, snapshot.response_rows, snapshot.scoping_decisions, sprs
    )
    return Response(
        content=content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{report_filename(assessment, "csv")}"'
        },
    )


@router.get(
    "/pdf",
    summary="Download the assessment as PDF",
    response_class=FileResponse,
)
async def download_pdf(
    assessment_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> FileResponse:
    """Render the assessment report to PDF and stream it back.

    Every figure is computed from a single read of the assessment so the
    report reflects one state, and the cached completion percentage is
    refreshed from that same read.

    Raises:
        HTTPException: 404 if the assessment does not exist.
    """
    assessment = await get_assessment_or_404(db, assessment_id)
    snapshot = await scoring_service.load_snapshot(db, assessment)
    completion = await scoring_service.refresh_completion(db, assessment, snapshot=snapshot)
    domains = await scoring_service.compute_domain_compliance(db, assessment, snapshot=snapshot)
    gaps = await scoring_service.compute_gaps(db, assessment, snapshot=snapshot)

    sprs = None
    if assessment.level == AssessmentLevel.level2:
        sprs = await scoring_service.compute_sprs(db, assessment, snapshot=snapshot)

    generator = ReportGenerator()
    report_data = generator.build_report_data(
        assessment,
        snapshot.response_rows,
        snapshot.scoping_decisions,
        completion=completion,
        domains=domains,
        gaps=gaps,
        sprs=sprs,
    )
    pdf_path = await asyncio.to_thread(generator.generate_pdf_report, assessment, report_data)
    return FileResponse(
        path=str(pdf_path),
        media_type="application/pdf",
        filename=report_filename(assessment, "pdf"),
    )
