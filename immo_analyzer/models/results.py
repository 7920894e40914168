from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from immo_analyzer.models.inputs import InputIssue

REPORTING_HORIZONS = (10, 20, 40)


@dataclass(frozen=True)
class IRRResult:
    rate: Decimal  # Percent; last estimate when not converged
    converged: bool
    iterations: int = 0


@dataclass(frozen=True)
class TaxBreakdown:
    income_tax: Decimal = Decimal("0")
    solidarity_tax: Decimal = Decimal("0")
    church_tax: Decimal = Decimal("0")
    total_tax: Decimal = Decimal("0")


@dataclass(frozen=True)
class YearlyProjection:
    year: int
    date: date

    # Property
    property_value: Decimal = Decimal("0")

    # Loan
    outstanding_loan: Decimal = Decimal("0")  # Balance at start of year
    annual_loan_payment: Decimal = Decimal("0")
    interest_paid: Decimal = Decimal("0")
    principal_repaid: Decimal = Decimal("0")

    # Income
    gross_rent: Decimal = Decimal("0")
    effective_rent: Decimal = Decimal("0")  # After vacancy

    # Costs
    total_operating_costs: Decimal = Decimal("0")
    depreciation: Decimal = Decimal("0")  # AfA

    # Tax
    taxable_income: Decimal = Decimal("0")  # Negative = loss
    tax_savings: Decimal = Decimal("0")  # Negative = additional liability

    # Cash flow
    gross_cash_flow: Decimal = Decimal("0")
    net_cash_flow: Decimal = Decimal("0")  # After tax
    cumulative_cash_flow: Decimal = Decimal("0")
    cumulative_tax_savings: Decimal = Decimal("0")

    # Equity
    equity: Decimal = Decimal("0")  # Value - balance
    net_worth: Decimal = Decimal("0")  # Equity + cumulative cash flow


@dataclass(frozen=True)
class HorizonSummary:
    years: int
    irr: IRRResult
    total_cash_flow: Decimal
    net_worth: Decimal
    roi: Decimal  # Percent


@dataclass(frozen=True)
class ProjectionResult:
    yearly_projections: tuple[YearlyProjection, ...]
    horizons: dict[int, HorizonSummary]

    total_investment: Decimal = Decimal("0")
    loan_amount: Decimal = Decimal("0")
    average_annual_cash_flow: Decimal = Decimal("0")
    income_tax: TaxBreakdown = field(default_factory=TaxBreakdown)
    issues: tuple[InputIssue, ...] = ()

    def horizon(self, years: int) -> HorizonSummary:
        if years not in self.horizons:
            raise ValueError(f"Unsupported reporting horizon: {years}")
        return self.horizons[years]

    def year(self, year: int) -> YearlyProjection:
        """Projection for a 1-indexed year."""
        if not 1 <= year <= len(self.yearly_projections):
            raise ValueError(f"Year out of range: {year}")
        return self.yearly_projections[year - 1]

    @property
    def irr_10(self) -> IRRResult:
        return self.horizons[10].irr

    @property
    def irr_20(self) -> IRRResult:
        return self.horizons[20].irr

    @property
    def irr_40(self) -> IRRResult:
        return self.horizons[40].irr
