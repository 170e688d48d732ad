from __future__ import annotations

from fastapi import APIRouter

from cmmc_tracker.catalog import DOMAINS, dod_weight, get_controls
from cmmc_tracker.models.enums import AssessmentLevel
from cmmc_tracker.schemas.catalog import ControlSchema, DomainSchema

router = APIRouter(prefix="/controls", tags=["controls"])


@router.get(
    "",
    response_model=list[ControlSchema],
    summary="List the control catalog for a level",
)
async def list_controls(level: AssessmentLevel = AssessmentLevel.level2) -> list[ControlSchema]:
    """Return every control of *level* in catalog order, with its DoD weight."""
    return [
        ControlSchema(
            control_id=c.control_id,
            domain=c.domain,
            domain_name=c.domain_name,
            name=c.name,
            description=c.description,
            level=c.level,
            dod_weight=dod_weight(c.control_id),
        )
        for c in get_controls(level)
    ]


@router.get(
    "/domains",
    response_model=list[DomainSchema],
    summary="List control domains",
)
async def list_domains() -> list[DomainSchema]:
    """Return the fourteen domain codes with their display names."""
    return [DomainSchema(code=code, name=name) for code, name in DOMAINS.items()]
