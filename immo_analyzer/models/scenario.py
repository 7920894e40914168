from dataclasses import dataclass, fields, replace
from decimal import Decimal
from enum import Enum

from immo_analyzer.models.inputs import InputField, PropertyInputs

BASE_SCENARIO_NAME = "Base"


class PresetKind(Enum):
    OPTIMISTIC = "optimistic"
    PESSIMISTIC = "pessimistic"
    CUSTOM = "custom"


class Direction(Enum):
    HIGHER_IS_BETTER = "higher_is_better"
    LOWER_IS_BETTER = "lower_is_better"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class ScenarioOverrides:
    """Sparse overrides: None means "keep the base value"."""
    purchase_price: Decimal | None = None
    notary_fees: Decimal | None = None
    transfer_tax: Decimal | None = None
    broker_commission: Decimal | None = None
    renovation_costs: Decimal | None = None
    equity: Decimal | None = None
    interest_rate: Decimal | None = None
    repayment_rate: Decimal | None = None
    monthly_rent: Decimal | None = None
    monthly_management: Decimal | None = None
    monthly_maintenance: Decimal | None = None
    monthly_insurance: Decimal | None = None
    monthly_other_costs: Decimal | None = None
    rent_increase_rate: Decimal | None = None
    value_increase_rate: Decimal | None = None
    cost_increase_rate: Decimal | None = None
    vacancy_rate: Decimal | None = None
    annual_income: Decimal | None = None
    marginal_tax_rate: Decimal | None = None
    depreciation_rate: Decimal | None = None

    @classmethod
    def of(cls, values: dict[InputField, Decimal]) -> "ScenarioOverrides":
        return cls(**{f.value: v for f, v in values.items()})

    def items(self) -> dict[InputField, Decimal]:
        return {
            InputField(f.name): getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self.items()

    def apply(self, inputs: PropertyInputs) -> PropertyInputs:
        changes = {f.value: v for f, v in self.items().items()}
        if not changes:
            return inputs
        return replace(inputs, **changes)


@dataclass(frozen=True)
class Scenario:
    name: str
    overrides: ScenarioOverrides = ScenarioOverrides()
    color: str = "#1e3a8a"

    @property
    def is_base(self) -> bool:
        return self.overrides.is_empty and self.name == BASE_SCENARIO_NAME
