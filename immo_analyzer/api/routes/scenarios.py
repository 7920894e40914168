"""Scenario comparison routes."""

from fastapi import APIRouter, HTTPException

from immo_analyzer.api.routes.projection import build_inputs, result_to_response
from immo_analyzer.api.schemas import (
    ScenarioCompareRequest,
    ScenarioCompareResponse,
    ScenarioResultResponse,
)
from immo_analyzer.models.scenario import ScenarioOverrides
from immo_analyzer.engine.scenarios import add_scenario, base_scenario, build_scenario
from immo_analyzer.engine.sensitivity import compute_scenarios

router = APIRouter(prefix="/api/v1/scenarios", tags=["scenarios"])


@router.post("/compare", response_model=ScenarioCompareResponse)
def compare(req: ScenarioCompareRequest):
    """Base plus each requested scenario, one full projection each."""
    inputs = build_inputs(req.inputs)
    try:
        scenarios = (base_scenario(),)
        for s in req.scenarios:
            overrides = ScenarioOverrides.of(s.overrides) if s.overrides is not None else None
            scenario = build_scenario(inputs, s.name, s.kind, len(scenarios), overrides)
            scenarios = add_scenario(scenarios, scenario)
        results = compute_scenarios(inputs, list(scenarios), req.horizon, req.start_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ScenarioCompareResponse(
        horizon=req.horizon,
        scenarios=[
            ScenarioResultResponse(
                name=s.name,
                color=s.color,
                overrides=s.overrides.items(),
                projection=result_to_response(results[s.name]) if results[s.name] is not None else None,
            )
            for s in scenarios
        ],
    )
