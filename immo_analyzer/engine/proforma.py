"""Projection engine: folds single-year projections into a 40-year result.

Pure computation. No I/O. PropertyInputs in, ProjectionResult out.
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from immo_analyzer.models.inputs import PropertyInputs
from immo_analyzer.models.results import (
    REPORTING_HORIZONS,
    HorizonSummary,
    ProjectionResult,
    YearlyProjection,
)
from immo_analyzer.engine.cashflow import project_year
from immo_analyzer.engine.irr import compute_irr
from immo_analyzer.engine.tax import calculate_german_tax

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
PROJECTION_YEARS = 40


def default_start_date(today: date | None = None) -> date:
    """First day of the month after today."""
    today = today or date.today()
    if today.month == 12:
        return date(today.year + 1, 1, 1)
    return date(today.year, today.month + 1, 1)


def build_yearly_projections(
    inputs: PropertyInputs,
    start_date: date,
    years: int = PROJECTION_YEARS,
) -> tuple[YearlyProjection, ...]:
    projections: list[YearlyProjection] = []
    prior = None
    for elapsed in range(years):
        prior = project_year(inputs, elapsed, start_date, prior)
        projections.append(prior)
    return tuple(projections)


def horizon_cash_flows(
    projections: tuple[YearlyProjection, ...], equity: Decimal, years: int
) -> list[Decimal]:
    """[-equity, ncf(1), ..., ncf(H) + equity(H)]: sale at book equity in year H."""
    flows = [-equity] + [p.net_cash_flow for p in projections[:years]]
    flows[-1] += projections[years - 1].equity
    return flows


def roi(net_worth: Decimal, equity: Decimal) -> Decimal:
    """Return on invested equity as a percentage."""
    if equity == 0:
        return Decimal("0")
    return ((net_worth / equity - 1) * 100).quantize(FOUR_PLACES, ROUND_HALF_UP)


def summarize_horizon(
    projections: tuple[YearlyProjection, ...], equity: Decimal, years: int
) -> HorizonSummary:
    final = projections[years - 1]
    irr = compute_irr(horizon_cash_flows(projections, equity, years))
    return HorizonSummary(
        years=years,
        irr=irr,
        total_cash_flow=final.cumulative_cash_flow,
        net_worth=final.net_worth,
        roi=roi(final.net_worth, equity),
    )


def compute_projection(
    inputs: PropertyInputs,
    start_date: date | None = None,
) -> ProjectionResult:
    """Run the full 40-year projection.

    All 40 years are always computed so consumers can slice to any
    reporting horizon without recomputation. Pass start_date for
    reproducible record dates.
    """
    start_date = start_date or default_start_date()

    issues = inputs.issues
    if issues:
        logger.warning(
            "Equity %s exceeds acquisition costs %s; loan clamped to 0",
            inputs.equity, inputs.acquisition_costs,
        )

    projections = build_yearly_projections(inputs, start_date)
    horizons = {
        years: summarize_horizon(projections, inputs.equity, years)
        for years in REPORTING_HORIZONS
    }

    average_cf = (projections[-1].cumulative_cash_flow / PROJECTION_YEARS).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )

    return ProjectionResult(
        yearly_projections=projections,
        horizons=horizons,
        total_investment=inputs.equity,
        loan_amount=inputs.loan_amount.quantize(TWO_PLACES, ROUND_HALF_UP),
        average_annual_cash_flow=average_cf,
        income_tax=calculate_german_tax(
            inputs.annual_income, inputs.marital_status, inputs.church_tax
        ),
        issues=issues,
    )
