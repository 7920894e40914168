"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from immo_analyzer.models.inputs import InputField, MaritalStatus
from immo_analyzer.models.scenario import PresetKind
from immo_analyzer.models.sensitivity import Metric


# ---- Request schemas ----

class PropertyInputsRequest(BaseModel):
    """Rates are whole-number percentages (3.75 = 3.75%)."""
    purchase_price: Decimal = Field(Decimal("300000"), ge=0)
    notary_fees: Decimal = Decimal("1.5")
    transfer_tax: Decimal = Decimal("5.0")
    broker_commission: Decimal = Decimal("3.57")
    renovation_costs: Decimal = Field(Decimal("10000"), ge=0)

    equity: Decimal = Field(Decimal("60000"), ge=0)
    interest_rate: Decimal = Field(Decimal("3.75"), ge=0)
    repayment_rate: Decimal = Field(Decimal("1.4"), ge=0)

    monthly_rent: Decimal = Field(Decimal("1200"), ge=0)
    monthly_management: Decimal = Decimal("60")
    monthly_maintenance: Decimal = Decimal("100")
    monthly_insurance: Decimal = Decimal("30")
    monthly_other_costs: Decimal = Decimal("20")

    rent_increase_rate: Decimal = Decimal("3.0")
    value_increase_rate: Decimal = Decimal("3.0")
    cost_increase_rate: Decimal = Decimal("2.0")

    annual_income: Decimal = Decimal("60000")
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    marginal_tax_rate: Decimal = Field(Decimal("42"), ge=0, le=100)
    church_tax: bool = False

    vacancy_rate: Decimal = Field(Decimal("0"), ge=0, le=100)
    depreciation_rate: Decimal = Field(Decimal("2.0"), ge=0)


class ProjectionRequest(BaseModel):
    inputs: PropertyInputsRequest = Field(default_factory=PropertyInputsRequest)
    start_date: date | None = Field(None, description="First projection month; default next month")


class VariableRequest(BaseModel):
    key: InputField
    name: str
    min: Decimal
    max: Decimal
    step: Decimal


class TornadoRequest(ProjectionRequest):
    metric: Metric = Metric.IRR_20
    horizon: int = 40
    variables: list[VariableRequest] | None = Field(None, description="Default catalog if omitted")


class HeatmapRequest(ProjectionRequest):
    x: InputField = InputField.INTEREST_RATE
    y: InputField = InputField.RENT_INCREASE_RATE
    metric: Metric = Metric.IRR_20
    horizon: int = 40


class ScenarioRequest(BaseModel):
    name: str
    kind: PresetKind = PresetKind.CUSTOM
    overrides: dict[InputField, Decimal] | None = Field(
        None, description="Preset defaults if omitted for optimistic/pessimistic"
    )


class ScenarioCompareRequest(ProjectionRequest):
    scenarios: list[ScenarioRequest] = []
    horizon: int = 40


# ---- Response schemas ----

class TaxResponse(BaseModel):
    income_tax: Decimal
    solidarity_tax: Decimal
    church_tax: Decimal
    total_tax: Decimal


class YearlyProjectionResponse(BaseModel):
    year: int
    date: date
    property_value: Decimal
    outstanding_loan: Decimal
    annual_loan_payment: Decimal
    interest_paid: Decimal
    principal_repaid: Decimal
    gross_rent: Decimal
    effective_rent: Decimal
    total_operating_costs: Decimal
    depreciation: Decimal
    taxable_income: Decimal
    tax_savings: Decimal
    gross_cash_flow: Decimal
    net_cash_flow: Decimal
    cumulative_cash_flow: Decimal
    cumulative_tax_savings: Decimal
    equity: Decimal
    net_worth: Decimal


class HorizonResponse(BaseModel):
    years: int
    irr: Decimal | None = Field(None, description="Percent; null when not computable")
    irr_converged: bool
    total_cash_flow: Decimal
    net_worth: Decimal
    roi: Decimal


class ProjectionResponse(BaseModel):
    total_investment: Decimal
    loan_amount: Decimal
    average_annual_cash_flow: Decimal
    income_tax: TaxResponse
    issues: list[str] = []
    horizons: list[HorizonResponse]
    yearly_projections: list[YearlyProjectionResponse]


class VariableResponse(BaseModel):
    key: InputField
    name: str
    min: Decimal
    max: Decimal
    step: Decimal
    unit: str
    current_value: Decimal


class TornadoPointResponse(BaseModel):
    variable: str
    key: InputField
    base_value: Decimal | None
    min_impact: Decimal | None
    max_impact: Decimal | None
    min_width_pct: Decimal | None
    max_width_pct: Decimal | None


class TornadoResponse(BaseModel):
    metric: Metric
    horizon: int
    points: list[TornadoPointResponse]


class HeatmapCellResponse(BaseModel):
    row: int
    col: int
    x_value: Decimal
    y_value: Decimal
    value: Decimal | None
    color: str | None


class HeatmapResponse(BaseModel):
    metric: Metric
    horizon: int
    x: VariableResponse
    y: VariableResponse
    cells: list[HeatmapCellResponse]


class ScenarioResultResponse(BaseModel):
    name: str
    color: str
    overrides: dict[InputField, Decimal]
    projection: ProjectionResponse | None


class ScenarioCompareResponse(BaseModel):
    horizon: int
    scenarios: list[ScenarioResultResponse]
