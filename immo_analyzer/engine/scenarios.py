"""Scenario presets, directional validation and scenario list management.

Scenario lists are immutable tuples; every operation returns a new tuple.
The base scenario always sits at index 0.
"""

import logging
from decimal import Decimal

from immo_analyzer.models.inputs import InputField, PropertyInputs
from immo_analyzer.models.scenario import (
    BASE_SCENARIO_NAME,
    Direction,
    PresetKind,
    Scenario,
    ScenarioOverrides,
)

logger = logging.getLogger(__name__)

SCENARIO_COLORS = (
    "#1e3a8a", "#10b981", "#ef4444", "#8b5cf6",
    "#f59e0b", "#3b82f6", "#ec4899", "#14b8a6",
)

# Fields not listed are NEUTRAL (e.g. marginal tax rate has no clear
# optimistic direction).
DIRECTIONS: dict[InputField, Direction] = {
    InputField.INTEREST_RATE: Direction.LOWER_IS_BETTER,
    InputField.COST_INCREASE_RATE: Direction.LOWER_IS_BETTER,
    InputField.VACANCY_RATE: Direction.LOWER_IS_BETTER,
    InputField.RENT_INCREASE_RATE: Direction.HIGHER_IS_BETTER,
    InputField.VALUE_INCREASE_RATE: Direction.HIGHER_IS_BETTER,
    InputField.REPAYMENT_RATE: Direction.HIGHER_IS_BETTER,
    InputField.DEPRECIATION_RATE: Direction.HIGHER_IS_BETTER,
}


def direction_of(field: InputField) -> Direction:
    return DIRECTIONS.get(field, Direction.NEUTRAL)


def scenario_color(index: int) -> str:
    return SCENARIO_COLORS[index % len(SCENARIO_COLORS)]


def base_scenario() -> Scenario:
    return Scenario(name=BASE_SCENARIO_NAME, overrides=ScenarioOverrides(), color=SCENARIO_COLORS[0])


def preset_overrides(inputs: PropertyInputs, kind: PresetKind) -> ScenarioOverrides:
    """Standard optimistic/pessimistic shifts, bounded to the sweep ranges."""
    if kind is PresetKind.OPTIMISTIC:
        return ScenarioOverrides(
            interest_rate=max(Decimal("2"), inputs.interest_rate - Decimal("0.5")),
            rent_increase_rate=min(Decimal("5"), inputs.rent_increase_rate + 1),
            value_increase_rate=min(Decimal("5"), inputs.value_increase_rate + 1),
            vacancy_rate=Decimal("0"),
        )
    if kind is PresetKind.PESSIMISTIC:
        return ScenarioOverrides(
            interest_rate=min(Decimal("6"), inputs.interest_rate + 1),
            rent_increase_rate=max(Decimal("1"), inputs.rent_increase_rate - 1),
            value_increase_rate=max(Decimal("0"), inputs.value_increase_rate - 1),
            vacancy_rate=Decimal("5"),
        )
    return ScenarioOverrides()


def is_valid_adjustment(
    field: InputField, value: Decimal, base_value: Decimal, kind: PresetKind
) -> bool:
    """Does value move field in the direction the preset kind promises?"""
    direction = direction_of(field)
    if kind is PresetKind.CUSTOM or direction is Direction.NEUTRAL:
        return True
    improves = value >= base_value if direction is Direction.HIGHER_IS_BETTER else value <= base_value
    worsens = value <= base_value if direction is Direction.HIGHER_IS_BETTER else value >= base_value
    return improves if kind is PresetKind.OPTIMISTIC else worsens


def invalid_adjustments(
    inputs: PropertyInputs, overrides: ScenarioOverrides, kind: PresetKind
) -> list[InputField]:
    return [
        field
        for field, value in overrides.items().items()
        if not is_valid_adjustment(field, value, inputs.value_of(field), kind)
    ]


def build_scenario(
    inputs: PropertyInputs,
    name: str,
    kind: PresetKind,
    index: int,
    overrides: ScenarioOverrides | None = None,
) -> Scenario:
    """Create a named scenario for list position index.

    Presets default to preset_overrides; explicit overrides must respect the
    preset's direction. Custom scenarios need at least one override.
    """
    if not name.strip():
        raise ValueError("Scenario name must not be blank")
    if overrides is None:
        # Preset defaults are bounded to the sweep ranges, not direction-checked
        overrides = preset_overrides(inputs, kind)
    else:
        bad = invalid_adjustments(inputs, overrides, kind)
        if bad:
            raise ValueError(
                f"{kind.value} scenario moves {', '.join(f.value for f in bad)} the wrong way"
            )
    if kind is PresetKind.CUSTOM and overrides.is_empty:
        raise ValueError("Custom scenarios must adjust at least one variable")
    return Scenario(name=name.strip(), overrides=overrides, color=scenario_color(index))


def add_scenario(scenarios: tuple[Scenario, ...], scenario: Scenario) -> tuple[Scenario, ...]:
    if any(s.name == scenario.name for s in scenarios):
        raise ValueError(f"Scenario {scenario.name!r} already exists")
    return (*scenarios, scenario)


def replace_scenario(
    scenarios: tuple[Scenario, ...], index: int, scenario: Scenario
) -> tuple[Scenario, ...]:
    if index == 0:
        raise ValueError("The base scenario cannot be edited")
    if not 0 < index < len(scenarios):
        raise ValueError(f"No scenario at index {index}")
    return (*scenarios[:index], scenario, *scenarios[index + 1:])


def remove_scenario(scenarios: tuple[Scenario, ...], index: int) -> tuple[Scenario, ...]:
    if index == 0:
        raise ValueError("The base scenario cannot be removed")
    if not 0 < index < len(scenarios):
        raise ValueError(f"No scenario at index {index}")
    logger.debug("Removing scenario %r", scenarios[index].name)
    return (*scenarios[:index], *scenarios[index + 1:])
