"""Canonical test fixtures used across all engine tests.

Fixture: 300K apartment, 60K equity, 3.75% interest + 1.4% repayment,
1,200/month rent, single investor at a 42% marginal rate, no church tax.
"""

import pytest
from datetime import date
from decimal import Decimal

from immo_analyzer.config import settings
from immo_analyzer.models.inputs import MaritalStatus, PropertyInputs
from immo_analyzer.engine.cache import get_cache


@pytest.fixture(autouse=True)
def fresh_cache():
    get_cache().clear()
    yield
    get_cache().clear()


@pytest.fixture
def start_date() -> date:
    return date(2025, 1, 1)


@pytest.fixture
def canonical_inputs() -> PropertyInputs:
    """Default form values of the analyzer."""
    return PropertyInputs(
        purchase_price=Decimal("300000"),
        notary_fees=Decimal("1.5"),
        transfer_tax=Decimal("5.0"),
        broker_commission=Decimal("3.57"),
        renovation_costs=Decimal("10000"),
        equity=Decimal("60000"),
        interest_rate=Decimal("3.75"),
        repayment_rate=Decimal("1.4"),
        monthly_rent=Decimal("1200"),
        monthly_management=Decimal("60"),
        monthly_maintenance=Decimal("100"),
        monthly_insurance=Decimal("30"),
        monthly_other_costs=Decimal("20"),
        rent_increase_rate=Decimal("3.0"),
        value_increase_rate=Decimal("3.0"),
        cost_increase_rate=Decimal("2.0"),
        annual_income=Decimal("60000"),
        marital_status=MaritalStatus.SINGLE,
        marginal_tax_rate=Decimal("42"),
        church_tax=False,
        vacancy_rate=Decimal("0"),
        depreciation_rate=Decimal("2.0"),
    )


@pytest.fixture
def married_church_inputs(canonical_inputs) -> PropertyInputs:
    """Married couple paying church tax, 5% vacancy."""
    from dataclasses import replace
    return replace(
        canonical_inputs,
        marital_status=MaritalStatus.MARRIED,
        church_tax=True,
        annual_income=Decimal("120000"),
        vacancy_rate=Decimal("5"),
    )


@pytest.fixture
def serial_sweeps(monkeypatch):
    monkeypatch.setattr(settings, "sweep_max_workers", 1)


@pytest.fixture
def threaded_sweeps(monkeypatch):
    monkeypatch.setattr(settings, "sweep_max_workers", 4)
