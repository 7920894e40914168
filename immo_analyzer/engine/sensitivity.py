"""Sensitivity analysis: one-way tornado, two-way heatmap, scenario comparison.

Every mode is a pure function of (base inputs, variables, metric, horizon).
Variants are independent projections, dispatched to a thread pool and
gathered in their original order.
"""

import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import date
from decimal import Decimal

from immo_analyzer.config import settings
from immo_analyzer.models.inputs import InputField, PropertyInputs
from immo_analyzer.models.results import REPORTING_HORIZONS, ProjectionResult
from immo_analyzer.models.scenario import BASE_SCENARIO_NAME, Scenario
from immo_analyzer.models.sensitivity import (
    HeatmapDataPoint,
    Metric,
    SensitivityVariable,
    TornadoDataPoint,
)
from immo_analyzer.engine.cache import compute_projection_cached
from immo_analyzer.engine.proforma import default_start_date
from immo_analyzer.engine.scenarios import base_scenario

logger = logging.getLogger(__name__)

NAN = Decimal("NaN")
GRID_FRACTIONS = (Decimal("0"), Decimal("0.25"), Decimal("0.5"), Decimal("0.75"), Decimal("1"))

_IRR_HORIZONS = {Metric.IRR_10: 10, Metric.IRR_20: 20, Metric.IRR_40: 40}

# (key, name, min, max, step)
DEFAULT_CATALOG = (
    (InputField.INTEREST_RATE, "Interest Rate", "2", "6", "0.25"),
    (InputField.RENT_INCREASE_RATE, "Rent Increase", "1", "5", "0.5"),
    (InputField.VALUE_INCREASE_RATE, "Property Value Increase", "0", "5", "0.5"),
    (InputField.COST_INCREASE_RATE, "Operating Costs Increase", "1", "4", "0.5"),
    (InputField.VACANCY_RATE, "Vacancy Rate", "0", "10", "1"),
    (InputField.MARGINAL_TAX_RATE, "Marginal Tax Rate", "30", "50", "1"),
    (InputField.REPAYMENT_RATE, "Repayment Rate", "1", "3", "0.2"),
    (InputField.DEPRECIATION_RATE, "Depreciation Rate", "1", "3", "0.5"),
)


def default_sensitivity_variables(inputs: PropertyInputs) -> list[SensitivityVariable]:
    """The standard eight-variable catalog, anchored at the current inputs."""
    variables = []
    for key, name, lo, hi, step in DEFAULT_CATALOG:
        lo, hi = Decimal(lo), Decimal(hi)
        current = inputs.value_of(key)
        if not lo <= current <= hi:
            logger.warning("%s base value %s outside [%s, %s]; clamping", name, current, lo, hi)
            current = min(hi, max(lo, current))
        variables.append(SensitivityVariable(
            key=key, name=name, min=lo, max=hi, step=Decimal(step), current_value=current,
        ))
    return variables


def _check_horizon(horizon: int) -> None:
    if horizon not in REPORTING_HORIZONS:
        raise ValueError(f"Horizon must be one of {REPORTING_HORIZONS}, got {horizon}")


def extract_metric(
    result: ProjectionResult | None,
    metric: Metric,
    horizon: int,
    strict: bool = False,
) -> Decimal:
    """Scalar metric from a projection.

    IRR metrics ignore the horizon; cashflow and networth read the year
    record at index horizon - 1. With strict=True a non-convergent IRR
    becomes NaN instead of the solver's last estimate. A missing result
    (failed variant) is NaN.
    """
    _check_horizon(horizon)
    if result is None:
        return NAN
    if metric in _IRR_HORIZONS:
        irr = result.horizon(_IRR_HORIZONS[metric]).irr
        if strict and not irr.converged:
            return NAN
        return irr.rate
    record = result.yearly_projections[horizon - 1]
    if metric is Metric.CASHFLOW:
        return record.cumulative_cash_flow
    return record.net_worth


def with_value(
    inputs: PropertyInputs, variable: SensitivityVariable, value: Decimal
) -> PropertyInputs:
    """Inputs with one variable set; values outside [min, max] are clamped."""
    if not variable.contains(value):
        clamped = variable.clamp(value)
        logger.warning(
            "%s test value %s outside [%s, %s]; clamped to %s",
            variable.name, value, variable.min, variable.max, clamped,
        )
        value = clamped
    return replace(inputs, **{variable.key.value: value})


def grid_values(variable: SensitivityVariable) -> list[Decimal]:
    """Five evenly spaced test values including both bounds."""
    span = variable.max - variable.min
    return [variable.min + span * f for f in GRID_FRACTIONS]


def _safe_projection(inputs: PropertyInputs, start_date: date) -> ProjectionResult | None:
    try:
        return compute_projection_cached(inputs, start_date)
    except ArithmeticError:
        # One bad variant must not abort the sweep; its metric becomes NaN
        logger.warning("Projection variant failed", exc_info=True)
        return None


def run_variants(
    variants: list[PropertyInputs], start_date: date
) -> list[ProjectionResult | None]:
    """Project every variant, preserving order."""
    workers = min(settings.sweep_max_workers, len(variants))
    logger.debug("Running %d projection variants (workers=%d)", len(variants), max(workers, 1))
    run = functools.partial(_safe_projection, start_date=start_date)
    if workers <= 1:
        return [run(v) for v in variants]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(run, variants))


def compute_tornado(
    inputs: PropertyInputs,
    variables: list[SensitivityVariable],
    metric: Metric,
    horizon: int,
    start_date: date | None = None,
) -> list[TornadoDataPoint]:
    """One-way sensitivity: each variable at its min and max, all else at base.

    Sorted by total absolute impact, largest first; ties keep catalog order.
    """
    _check_horizon(horizon)
    start_date = start_date or default_start_date()
    strict = settings.strict_irr_metrics

    base = extract_metric(_safe_projection(inputs, start_date), metric, horizon, strict)

    variants = []
    for variable in variables:
        variants.append(with_value(inputs, variable, variable.min))
        variants.append(with_value(inputs, variable, variable.max))
    results = run_variants(variants, start_date)

    points = [
        TornadoDataPoint(
            variable=variable.name,
            key=variable.key,
            base_value=base,
            min_impact=extract_metric(results[2 * i], metric, horizon, strict),
            max_impact=extract_metric(results[2 * i + 1], metric, horizon, strict),
        )
        for i, variable in enumerate(variables)
    ]
    return sorted(points, key=lambda p: p.total_impact, reverse=True)


def compute_heatmap(
    inputs: PropertyInputs,
    var_x: SensitivityVariable,
    var_y: SensitivityVariable,
    metric: Metric,
    horizon: int,
    start_date: date | None = None,
) -> list[HeatmapDataPoint]:
    """Two-way sensitivity over a 5x5 grid; rows follow Y, columns follow X."""
    _check_horizon(horizon)
    if var_x.key == var_y.key:
        raise ValueError("Heatmap axes must be two different variables")
    start_date = start_date or default_start_date()
    strict = settings.strict_irr_metrics

    xs = grid_values(var_x)
    ys = grid_values(var_y)
    cells = [(row, col) for row in range(len(ys)) for col in range(len(xs))]
    variants = [
        with_value(with_value(inputs, var_x, xs[col]), var_y, ys[row])
        for row, col in cells
    ]
    results = run_variants(variants, start_date)

    return [
        HeatmapDataPoint(
            row=row,
            col=col,
            x_value=xs[col],
            y_value=ys[row],
            value=extract_metric(result, metric, horizon, strict),
        )
        for (row, col), result in zip(cells, results)
    ]


def compute_scenarios(
    inputs: PropertyInputs,
    scenarios: list[Scenario],
    horizon: int,
    start_date: date | None = None,
) -> dict[str, ProjectionResult | None]:
    """Full projection per scenario, keyed by name in input order.

    The base scenario is always included, first if the caller omitted it.
    """
    _check_horizon(horizon)
    start_date = start_date or default_start_date()

    if any(s.name == BASE_SCENARIO_NAME and not s.is_base for s in scenarios):
        raise ValueError(f"Scenario name {BASE_SCENARIO_NAME!r} is reserved for the unmodified inputs")
    if not any(s.is_base for s in scenarios):
        scenarios = [base_scenario(), *scenarios]
    names = [s.name for s in scenarios]
    if len(set(names)) != len(names):
        raise ValueError("Scenario names must be unique")

    results = run_variants([s.overrides.apply(inputs) for s in scenarios], start_date)
    return dict(zip(names, results))
