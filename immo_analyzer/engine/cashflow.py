"""Single-year projection: rent, costs, AfA, loan, tax effect, cash flow.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from immo_analyzer.models.inputs import HUNDRED, PropertyInputs
from immo_analyzer.models.results import YearlyProjection
from immo_analyzer.engine.debt import loan_year
from immo_analyzer.engine.tax import rental_tax_effect, taxable_rental_income

TWO_PLACES = Decimal("0.01")


def _growth(rate_pct: Decimal, elapsed_years: int) -> Decimal:
    return (1 + rate_pct / HUNDRED) ** elapsed_years


def property_value(inputs: PropertyInputs, elapsed_years: int) -> Decimal:
    """Geometric appreciation of the purchase price."""
    value = inputs.purchase_price * _growth(inputs.value_increase_rate, elapsed_years)
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def gross_rent(inputs: PropertyInputs, elapsed_years: int) -> Decimal:
    annual = inputs.monthly_rent * 12 * _growth(inputs.rent_increase_rate, elapsed_years)
    return annual.quantize(TWO_PLACES, ROUND_HALF_UP)


def effective_rent(inputs: PropertyInputs, elapsed_years: int) -> Decimal:
    """Gross rent less vacancy."""
    gr = gross_rent(inputs, elapsed_years)
    return (gr * (1 - inputs.vacancy_rate / HUNDRED)).quantize(TWO_PLACES, ROUND_HALF_UP)


def operating_costs(inputs: PropertyInputs, elapsed_years: int) -> Decimal:
    """Non-allocable running costs (Hausgeld share, insurance, upkeep)."""
    annual = inputs.monthly_operating_costs * 12 * _growth(inputs.cost_increase_rate, elapsed_years)
    return annual.quantize(TWO_PLACES, ROUND_HALF_UP)


def depreciation(inputs: PropertyInputs) -> Decimal:
    """Straight-line AfA on the building share of the purchase price."""
    return (inputs.building_value * inputs.depreciation_rate / HUNDRED).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )


def year_date(start_date: date, elapsed_years: int) -> date:
    try:
        return start_date.replace(year=start_date.year + elapsed_years)
    except ValueError:
        # Feb 29 start in a non-leap target year
        return start_date.replace(year=start_date.year + elapsed_years, day=28)


def project_year(
    inputs: PropertyInputs,
    elapsed_years: int,
    start_date: date,
    prior: YearlyProjection | None = None,
) -> YearlyProjection:
    """Build the record for year elapsed_years + 1.

    Running totals come from the prior record; the first year starts at zero.
    """
    value = property_value(inputs, elapsed_years)
    gr = gross_rent(inputs, elapsed_years)
    er = effective_rent(inputs, elapsed_years)
    costs = operating_costs(inputs, elapsed_years)
    afa = depreciation(inputs)

    loan = loan_year(
        principal=inputs.loan_amount,
        interest_rate=inputs.interest_rate,
        repayment_rate=inputs.repayment_rate,
        elapsed_years=elapsed_years,
    )

    taxable = taxable_rental_income(
        effective_rent=er,
        operating_costs=costs,
        interest_paid=loan.interest,
        depreciation=afa,
    )
    tax_savings = rental_tax_effect(taxable, inputs.marginal_tax_rate, inputs.church_tax)

    gross_cf = er - costs - loan.payment
    net_cf = gross_cf + tax_savings

    prior_cf = prior.cumulative_cash_flow if prior else Decimal("0")
    prior_tax = prior.cumulative_tax_savings if prior else Decimal("0")
    cumulative_cf = prior_cf + net_cf

    equity = value - loan.balance

    return YearlyProjection(
        year=elapsed_years + 1,
        date=year_date(start_date, elapsed_years),
        property_value=value,
        outstanding_loan=loan.balance,
        annual_loan_payment=loan.payment,
        interest_paid=loan.interest,
        principal_repaid=loan.principal,
        gross_rent=gr,
        effective_rent=er,
        total_operating_costs=costs,
        depreciation=afa,
        taxable_income=taxable,
        tax_savings=tax_savings,
        gross_cash_flow=gross_cf,
        net_cash_flow=net_cf,
        cumulative_cash_flow=cumulative_cf,
        cumulative_tax_savings=prior_tax + tax_savings,
        equity=equity,
        net_worth=equity + cumulative_cf,
    )
