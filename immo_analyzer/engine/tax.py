"""German income tax (Einkommensteuer 2024/2025) and rental tax effect.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from immo_analyzer.models.inputs import HUNDRED, MaritalStatus
from immo_analyzer.models.results import TaxBreakdown

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

# Zone boundaries (single-filer income)
GRUNDFREIBETRAG = Decimal("11604")
ZONE_A_LIMIT = Decimal("17005")
ZONE_B_LIMIT = Decimal("66760")
ZONE_42_LIMIT = Decimal("277825")

SOLIDARITY_THRESHOLDS = {
    MaritalStatus.SINGLE: Decimal("16369"),
    MaritalStatus.MARRIED: Decimal("32734"),
}
SOLIDARITY_RATE = Decimal("0.055")
SOLIDARITY_FACTOR = Decimal("1.2")  # Simplified phase-in
CHURCH_TAX_RATE = Decimal("0.08")
CHURCH_TAX_FACTOR = Decimal("1.08")


def income_tax_single(income: Decimal) -> Decimal:
    """Tariff for one person's taxable income. Unrounded."""
    if income <= GRUNDFREIBETRAG:
        return ZERO
    if income <= ZONE_A_LIMIT:
        y = (income - GRUNDFREIBETRAG) / 10000
        return (Decimal("922.98") * y + 1400) * y
    if income <= ZONE_B_LIMIT:
        z = (income - ZONE_A_LIMIT) / 10000
        return (Decimal("181.19") * z + 2397) * z + Decimal("1025.38")
    if income <= ZONE_42_LIMIT:
        return Decimal("0.42") * income - Decimal("10602.13")
    return Decimal("0.45") * income - Decimal("18936.88")


def calculate_german_tax(
    taxable_income: Decimal,
    marital_status: MaritalStatus,
    church_tax: bool,
) -> TaxBreakdown:
    """Income tax, solidarity surcharge and church tax.

    Married couples use Ehegattensplitting: the tariff is applied to half the
    joint income and the result doubled.
    """
    if marital_status is MaritalStatus.MARRIED:
        income_tax = income_tax_single(taxable_income / 2) * 2
    else:
        income_tax = income_tax_single(taxable_income)

    threshold = SOLIDARITY_THRESHOLDS[marital_status]
    solidarity = ZERO
    if income_tax > threshold:
        solidarity = (income_tax - threshold) * SOLIDARITY_RATE * SOLIDARITY_FACTOR

    church = income_tax * CHURCH_TAX_RATE if church_tax else ZERO

    income_tax = max(ZERO, income_tax)
    solidarity = max(ZERO, solidarity)
    church = max(ZERO, church)
    return TaxBreakdown(
        income_tax=income_tax.quantize(TWO_PLACES, ROUND_HALF_UP),
        solidarity_tax=solidarity.quantize(TWO_PLACES, ROUND_HALF_UP),
        church_tax=church.quantize(TWO_PLACES, ROUND_HALF_UP),
        total_tax=(income_tax + solidarity + church).quantize(TWO_PLACES, ROUND_HALF_UP),
    )


def taxable_rental_income(
    effective_rent: Decimal,
    operating_costs: Decimal,
    interest_paid: Decimal,
    depreciation: Decimal,
) -> Decimal:
    """Einkünfte aus Vermietung: rent - costs - interest - AfA.

    Principal repayment is not deductible.
    """
    return effective_rent - operating_costs - interest_paid - depreciation


def rental_tax_effect(
    taxable_income: Decimal,
    marginal_tax_rate: Decimal,
    church_tax: bool,
) -> Decimal:
    """Tax saved (positive) or owed (negative) at the marginal rate.

    A rental loss offsets other income; church tax scales the effect by 1.08.
    """
    effect = -taxable_income * (marginal_tax_rate / HUNDRED)
    if church_tax:
        effect *= CHURCH_TAX_FACTOR
    return effect.quantize(TWO_PLACES, ROUND_HALF_UP)
