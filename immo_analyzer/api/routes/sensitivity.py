"""Sensitivity routes: variable catalog, tornado, heatmap."""

from fastapi import APIRouter, HTTPException

from immo_analyzer.api.routes.projection import build_inputs, finite_or_none
from immo_analyzer.api.schemas import (
    HeatmapCellResponse,
    HeatmapRequest,
    HeatmapResponse,
    PropertyInputsRequest,
    TornadoPointResponse,
    TornadoRequest,
    TornadoResponse,
    VariableResponse,
)
from immo_analyzer.models.inputs import InputField, PropertyInputs
from immo_analyzer.models.sensitivity import SensitivityVariable
from immo_analyzer.engine.normalize import css_rgb, heatmap_colors, tornado_bar_widths
from immo_analyzer.engine.sensitivity import (
    compute_heatmap,
    compute_tornado,
    default_sensitivity_variables,
)

router = APIRouter(prefix="/api/v1/sensitivity", tags=["sensitivity"])


def _variable_response(v: SensitivityVariable) -> VariableResponse:
    return VariableResponse(
        key=v.key, name=v.name, min=v.min, max=v.max,
        step=v.step, unit=v.unit, current_value=v.current_value,
    )


def _catalog_variable(inputs: PropertyInputs, key: InputField) -> SensitivityVariable:
    for v in default_sensitivity_variables(inputs):
        if v.key == key:
            return v
    raise HTTPException(status_code=400, detail=f"{key.value} is not a sensitivity variable")


@router.get("/variables", response_model=list[VariableResponse])
def variables():
    """Default catalog anchored at the default inputs."""
    inputs = build_inputs(PropertyInputsRequest())
    return [_variable_response(v) for v in default_sensitivity_variables(inputs)]


@router.post("/tornado", response_model=TornadoResponse)
def tornado(req: TornadoRequest):
    inputs = build_inputs(req.inputs)
    try:
        if req.variables is None:
            catalog = default_sensitivity_variables(inputs)
        else:
            catalog = [
                SensitivityVariable(
                    key=v.key, name=v.name, min=v.min, max=v.max, step=v.step,
                    current_value=min(v.max, max(v.min, inputs.value_of(v.key))),
                )
                for v in req.variables
            ]
        points = compute_tornado(inputs, catalog, req.metric, req.horizon, req.start_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    widths = tornado_bar_widths(points)
    return TornadoResponse(
        metric=req.metric,
        horizon=req.horizon,
        points=[
            TornadoPointResponse(
                variable=p.variable,
                key=p.key,
                base_value=finite_or_none(p.base_value),
                min_impact=finite_or_none(p.min_impact),
                max_impact=finite_or_none(p.max_impact),
                min_width_pct=min_w,
                max_width_pct=max_w,
            )
            for p, (min_w, max_w) in zip(points, widths)
        ],
    )


@router.post("/heatmap", response_model=HeatmapResponse)
def heatmap(req: HeatmapRequest):
    inputs = build_inputs(req.inputs)
    var_x = _catalog_variable(inputs, req.x)
    var_y = _catalog_variable(inputs, req.y)
    try:
        cells = compute_heatmap(inputs, var_x, var_y, req.metric, req.horizon, req.start_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    colors = heatmap_colors(cells)
    return HeatmapResponse(
        metric=req.metric,
        horizon=req.horizon,
        x=_variable_response(var_x),
        y=_variable_response(var_y),
        cells=[
            HeatmapCellResponse(
                row=c.row,
                col=c.col,
                x_value=c.x_value,
                y_value=c.y_value,
                value=finite_or_none(c.value),
                color=css_rgb(color) if color else None,
            )
            for c, color in zip(cells, colors)
        ],
    )
