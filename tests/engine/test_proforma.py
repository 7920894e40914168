import pytest
from dataclasses import replace
from datetime import date
from decimal import Decimal

from immo_analyzer.engine.proforma import (
    PROJECTION_YEARS,
    compute_projection,
    default_start_date,
    horizon_cash_flows,
    roi,
)
from immo_analyzer.models.inputs import InputIssue


class TestProjection:
    def test_always_forty_years(self, canonical_inputs, start_date):
        result = compute_projection(canonical_inputs, start_date)
        assert len(result.yearly_projections) == PROJECTION_YEARS == 40

    def test_yearly_projections_sequential(self, canonical_inputs, start_date):
        result = compute_projection(canonical_inputs, start_date)
        for i, proj in enumerate(result.yearly_projections):
            assert proj.year == i + 1
            assert proj.date == date(2025 + i, 1, 1)

    def test_idempotent(self, canonical_inputs, start_date):
        assert compute_projection(canonical_inputs, start_date) == compute_projection(
            canonical_inputs, start_date
        )

    def test_cumulative_is_running_sum(self, canonical_inputs, start_date):
        result = compute_projection(canonical_inputs, start_date)
        total = Decimal("0")
        for proj in result.yearly_projections:
            total += proj.net_cash_flow
            assert proj.cumulative_cash_flow == total
            assert proj.net_worth == proj.equity + proj.cumulative_cash_flow

    def test_loan_paid_off_after_thirty_years(self, canonical_inputs, start_date):
        result = compute_projection(canonical_inputs, start_date)
        assert result.year(30).outstanding_loan > 0
        for proj in result.yearly_projections[30:]:
            assert proj.outstanding_loan == Decimal("0")
            assert proj.annual_loan_payment == Decimal("0")

    def test_property_value_appreciates(self, canonical_inputs, start_date):
        result = compute_projection(canonical_inputs, start_date)
        values = [p.property_value for p in result.yearly_projections]
        for prev, cur in zip(values, values[1:]):
            assert cur > prev

    def test_outside_income_tax(self, canonical_inputs, start_date):
        result = compute_projection(canonical_inputs, start_date)
        assert result.income_tax.income_tax == Decimal("14680.71")

    def test_married_with_church_tax(self, married_church_inputs, start_date):
        result = compute_projection(married_church_inputs, start_date)
        assert result.income_tax.church_tax > 0
        assert result.income_tax.total_tax > result.income_tax.income_tax
        first = result.year(1)
        assert first.effective_rent < first.gross_rent


class TestCanonicalScenario:
    """300K, 60K equity, 3.75% + 1.4%, 1,200 rent, 42%, single, no church tax."""

    def test_year_one_is_a_tax_loss(self, canonical_inputs, start_date):
        first = compute_projection(canonical_inputs, start_date).year(1)
        assert first.taxable_income < 0
        assert first.tax_savings > 0

    def test_irrs_computable(self, canonical_inputs, start_date):
        result = compute_projection(canonical_inputs, start_date)
        for years in (10, 20, 40):
            irr = result.horizon(years).irr
            assert irr.converged
            assert irr.rate.is_finite()

    def test_loan_amount(self, canonical_inputs, start_date):
        result = compute_projection(canonical_inputs, start_date)
        # 300000 * 1.1007 + 10000 - 60000
        assert result.loan_amount == Decimal("280210.00")
        assert result.total_investment == Decimal("60000")
        assert result.issues == ()


class TestSummary:
    def test_horizon_cash_flows_shape(self, canonical_inputs, start_date):
        result = compute_projection(canonical_inputs, start_date)
        flows = horizon_cash_flows(result.yearly_projections, canonical_inputs.equity, 10)
        assert len(flows) == 11
        assert flows[0] == Decimal("-60000")
        assert flows[1] == result.year(1).net_cash_flow
        assert flows[-1] == result.year(10).net_cash_flow + result.year(10).equity

    def test_horizon_values(self, canonical_inputs, start_date):
        result = compute_projection(canonical_inputs, start_date)
        for years in (10, 20, 40):
            summary = result.horizon(years)
            assert summary.total_cash_flow == result.year(years).cumulative_cash_flow
            assert summary.net_worth == result.year(years).net_worth
            assert summary.roi == roi(result.year(years).net_worth, Decimal("60000"))

    def test_average_annual_cash_flow(self, canonical_inputs, start_date):
        result = compute_projection(canonical_inputs, start_date)
        expected = (result.year(40).cumulative_cash_flow / 40).quantize(Decimal("0.01"))
        assert abs(result.average_annual_cash_flow - expected) <= Decimal("0.01")

    def test_roi(self):
        assert roi(Decimal("150000"), Decimal("60000")) == Decimal("150.0000")
        assert roi(Decimal("150000"), Decimal("0")) == Decimal("0")

    def test_unknown_horizon(self, canonical_inputs, start_date):
        result = compute_projection(canonical_inputs, start_date)
        with pytest.raises(ValueError):
            result.horizon(15)


class TestInvalidInput:
    def test_equity_exceeding_cost_clamps_loan(self, canonical_inputs, start_date):
        inputs = replace(canonical_inputs, equity=Decimal("400000"))
        result = compute_projection(inputs, start_date)
        assert result.loan_amount == Decimal("0")
        assert result.issues == (InputIssue.EQUITY_EXCEEDS_COST,)
        first = result.year(1)
        assert first.interest_paid == Decimal("0")
        assert first.annual_loan_payment == Decimal("0")
        assert first.equity == first.property_value


class TestStartDate:
    def test_first_of_next_month(self):
        assert default_start_date(date(2025, 3, 17)) == date(2025, 4, 1)

    def test_december_rolls_over(self):
        assert default_start_date(date(2025, 12, 5)) == date(2026, 1, 1)
