from __future__ import annotations

import csv
import io
from pathlib import Path
from types import SimpleNamespace

import pytest
from httpx import AsyncClient

from cmmc_tracker.catalog import LEVEL1_CONTROLS
from cmmc_tracker.models.enums import AssessmentLevel, ControlStatus
from cmmc_tracker.reports.generator import ReportGenerator
from cmmc_tracker.scoring import (
    ResponseRecord,
    calculate_completion,
    calculate_domain_compliance,
    identify_gaps,
)
from cmmc_tracker.services import scoring_service


async def _create_assessment(client: AsyncClient, level: str, name: str = "Q3 Self Assessment") -> str:
    resp = await client.post(
        "/api/assessments",
        json={"name": name, "level": level, "organization_name": "Acme, Inc."},
    )
    assert resp.status_code == 201, resp.text
    return f"/api/assessments/{resp.json()['id']}"


@pytest.mark.asyncio
async def test_csv_report_level2(client: AsyncClient) -> None:
    """The CSV lists each response and ends with the SPRS summary."""
    base = await _create_assessment(client, "level2")
    await client.post(
        f"{base}/responses",
        json={"control_id": "3.1.1", "status": "no", "notes": 'Shared "admin" account'},
    )
    await client.post(f"{base}/responses", json={"control_id": "3.1.5", "status": "yes"})
    await client.post(f"{base}/scoping", json={"control_id": "3.1.5", "applicable": False})

    resp = await client.get(f"{base}/reports/csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert 'filename="q3-self-assessment.csv"' in resp.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0] == [
        "Control ID",
        "Status",
        "In Scope",
        "DoD Value",
        "Implementation Notes",
        "Last Updated",
    ]
    assert rows[1][:5] == ["3.1.1", "no", "Yes", "5", 'Shared "admin" account']
    assert rows[2][:4] == ["3.1.5", "yes", "No", "3"]
    assert ["Organization", "Acme, Inc."] in rows
    assert ["SPRS Score Summary"] in rows
    assert ["Implementation Level", "Severely Non-Compliant (Below -100)"] in rows


@pytest.mark.asyncio
async def test_csv_report_level1_has_no_sprs(client: AsyncClient) -> None:
    base = await _create_assessment(client, "level1")
    await client.post(f"{base}/responses", json={"control_id": "AC.1.001", "status": "yes"})

    resp = await client.get(f"{base}/reports/csv")
    assert resp.status_code == 200
    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[1][:4] == ["AC.1.001", "yes", "Yes", "1"]
    assert ["SPRS Score Summary"] not in rows


@pytest.mark.asyncio
async def test_csv_report_unknown_assessment(client: AsyncClient) -> None:
    resp = await client.get("/api/assessments/00000000-0000-0000-0000-000000000000/reports/csv")
    assert resp.status_code == 404


def test_report_html_renders_sections(tmp_path: Path) -> None:
    """The PDF templates render to HTML without needing WeasyPrint."""
    assessment = SimpleNamespace(
        id="a1",
        name="Level 1 <Pilot>",
        organization_name="Acme",
        level=AssessmentLevel.level1,
    )
    response_rows = [
        SimpleNamespace(control_id="AC.1.001", status=ControlStatus.no, notes="Needs review", updated_at=None)
    ]
    records = [ResponseRecord("AC.1.001", ControlStatus.no)]

    generator = ReportGenerator(reports_dir=tmp_path)
    data = generator.build_report_data(
        assessment,
        response_rows,
        [],
        completion=calculate_completion(17, records, []),
        domains=calculate_domain_compliance(LEVEL1_CONTROLS, records, []),
        gaps=identify_gaps(LEVEL1_CONTROLS, records, []),
    )
    html = generator.render_html(data)

    assert "Level 1 &lt;Pilot&gt;" in html
    assert "Assessment Summary" in html
    assert "Domain Compliance" in html
    assert "AC.1.001" in html
    assert "Needs review" in html
    assert "SPRS Score Summary" not in html


@pytest.mark.asyncio
async def test_pdf_report_scores_a_single_read(
    client: AsyncClient,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Completion, domains, gaps and SPRS are all computed from one load of the store."""
    base = await _create_assessment(client, "level2")
    await client.post(f"{base}/responses", json={"control_id": "3.1.1", "status": "no"})
    await client.post(f"{base}/responses", json={"control_id": "3.1.2", "status": "yes"})

    real_get_responses = scoring_service.get_responses
    reads: list[object] = []

    async def _counting_get_responses(db, assessment_id):
        reads.append(assessment_id)
        return await real_get_responses(db, assessment_id)

    captured: dict = {}

    def _fake_pdf(self, assessment, report_data):
        captured.update(report_data)
        path = tmp_path / "report.pdf"
        path.write_bytes(b"%PDF-1.7\n")
        return path

    monkeypatch.setattr(scoring_service, "get_responses", _counting_get_responses)
    monkeypatch.setattr(ReportGenerator, "generate_pdf_report", _fake_pdf)

    resp = await client.get(f"{base}/reports/pdf")
    assert resp.status_code == 200, resp.text
    assert resp.headers["content-type"] == "application/pdf"

    assert len(reads) == 1
    assert captured["completion"].answered_controls == 2
    assert captured["sprs"].sprs_score == 110 - (313 - 5)
    assert [c["control_id"] for c in captured["controls"]] == ["3.1.1", "3.1.2"]
    assert len(captured["gaps"]) == 109
    assert captured["gaps"][0].control_id == "3.1.1"
