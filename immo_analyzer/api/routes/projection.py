"""Projection routes: inputs in, 40-year projection out."""

from dataclasses import asdict
from decimal import Decimal

from fastapi import APIRouter

from immo_analyzer.api.schemas import (
    HorizonResponse,
    ProjectionRequest,
    ProjectionResponse,
    PropertyInputsRequest,
    TaxResponse,
    YearlyProjectionResponse,
)
from immo_analyzer.models.inputs import PropertyInputs
from immo_analyzer.models.results import ProjectionResult
from immo_analyzer.engine.cache import compute_projection_cached

router = APIRouter(prefix="/api/v1", tags=["projection"])


def finite_or_none(value: Decimal) -> Decimal | None:
    return value if value.is_finite() else None


def build_inputs(req: PropertyInputsRequest) -> PropertyInputs:
    return PropertyInputs(**req.model_dump())


def result_to_response(result: ProjectionResult) -> ProjectionResponse:
    """Convert engine ProjectionResult to API response."""
    horizons = [
        HorizonResponse(
            years=h.years,
            irr=finite_or_none(h.irr.rate),
            irr_converged=h.irr.converged,
            total_cash_flow=h.total_cash_flow,
            net_worth=h.net_worth,
            roi=h.roi,
        )
        for h in result.horizons.values()
    ]
    yearly = [YearlyProjectionResponse(**asdict(p)) for p in result.yearly_projections]

    return ProjectionResponse(
        total_investment=result.total_investment,
        loan_amount=result.loan_amount,
        average_annual_cash_flow=result.average_annual_cash_flow,
        income_tax=TaxResponse(**asdict(result.income_tax)),
        issues=[issue.value for issue in result.issues],
        horizons=horizons,
        yearly_projections=yearly,
    )


@router.post("/projection", response_model=ProjectionResponse)
def projection(req: ProjectionRequest):
    """Full 40-year projection with 10/20/40-year summaries."""
    result = compute_projection_cached(build_inputs(req.inputs), req.start_date)
    return result_to_response(result)
