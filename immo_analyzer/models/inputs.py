from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

HUNDRED = Decimal("100")
BUILDING_SHARE = Decimal("0.8")  # Land (20%) is never depreciated


class MaritalStatus(Enum):
    SINGLE = "single"
    MARRIED = "married"


class InputField(Enum):
    """Numeric PropertyInputs fields that sweeps and scenarios may vary."""
    PURCHASE_PRICE = "purchase_price"
    NOTARY_FEES = "notary_fees"
    TRANSFER_TAX = "transfer_tax"
    BROKER_COMMISSION = "broker_commission"
    RENOVATION_COSTS = "renovation_costs"
    EQUITY = "equity"
    INTEREST_RATE = "interest_rate"
    REPAYMENT_RATE = "repayment_rate"
    MONTHLY_RENT = "monthly_rent"
    MONTHLY_MANAGEMENT = "monthly_management"
    MONTHLY_MAINTENANCE = "monthly_maintenance"
    MONTHLY_INSURANCE = "monthly_insurance"
    MONTHLY_OTHER_COSTS = "monthly_other_costs"
    RENT_INCREASE_RATE = "rent_increase_rate"
    VALUE_INCREASE_RATE = "value_increase_rate"
    COST_INCREASE_RATE = "cost_increase_rate"
    VACANCY_RATE = "vacancy_rate"
    ANNUAL_INCOME = "annual_income"
    MARGINAL_TAX_RATE = "marginal_tax_rate"
    DEPRECIATION_RATE = "depreciation_rate"


class InputIssue(Enum):
    EQUITY_EXCEEDS_COST = "equity_exceeds_cost"


@dataclass(frozen=True)
class PropertyInputs:
    """All rate fields are whole-number percentages (3.75 means 3.75%)."""

    # Purchase
    purchase_price: Decimal = Decimal("300000")
    notary_fees: Decimal = Decimal("1.5")  # Notary + land registry, % of price
    transfer_tax: Decimal = Decimal("5.0")  # Grunderwerbsteuer, varies by state
    broker_commission: Decimal = Decimal("3.57")
    renovation_costs: Decimal = Decimal("10000")

    # Financing
    equity: Decimal = Decimal("60000")
    interest_rate: Decimal = Decimal("3.75")
    repayment_rate: Decimal = Decimal("1.4")

    # Income
    monthly_rent: Decimal = Decimal("1200")

    # Operating costs (monthly)
    monthly_management: Decimal = Decimal("60")
    monthly_maintenance: Decimal = Decimal("100")
    monthly_insurance: Decimal = Decimal("30")
    monthly_other_costs: Decimal = Decimal("20")

    # Growth
    rent_increase_rate: Decimal = Decimal("3.0")
    value_increase_rate: Decimal = Decimal("3.0")
    cost_increase_rate: Decimal = Decimal("2.0")

    # Tax
    annual_income: Decimal = Decimal("60000")
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    marginal_tax_rate: Decimal = Decimal("42")
    church_tax: bool = False

    # Other
    vacancy_rate: Decimal = Decimal("0")
    depreciation_rate: Decimal = Decimal("2.0")  # 2.5 for buildings before 1925

    @property
    def acquisition_costs(self) -> Decimal:
        """Price plus ancillary purchase costs plus renovation."""
        fees_pct = self.notary_fees + self.transfer_tax + self.broker_commission
        return self.purchase_price * (1 + fees_pct / HUNDRED) + self.renovation_costs

    @property
    def loan_amount(self) -> Decimal:
        return max(Decimal("0"), self.acquisition_costs - self.equity)

    @property
    def issues(self) -> tuple[InputIssue, ...]:
        if self.equity > self.acquisition_costs:
            return (InputIssue.EQUITY_EXCEEDS_COST,)
        return ()

    @property
    def monthly_operating_costs(self) -> Decimal:
        return (
            self.monthly_management
            + self.monthly_maintenance
            + self.monthly_insurance
            + self.monthly_other_costs
        )

    @property
    def building_value(self) -> Decimal:
        return self.purchase_price * BUILDING_SHARE

    def value_of(self, field: InputField) -> Decimal:
        return getattr(self, field.value)
