"""Annuity loan (Annuitätendarlehen) amortization.

Monthly compounding, reported annually. Pure functions, no I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from immo_analyzer.models.inputs import HUNDRED

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")
TERM_MONTHS = 360  # Fixed 30-year term


@dataclass(frozen=True)
class LoanYear:
    balance: Decimal  # Outstanding at start of the year
    payment: Decimal
    interest: Decimal
    principal: Decimal


def payment_rate(interest_rate: Decimal, repayment_rate: Decimal) -> Decimal:
    """Annual annuity rate as a fraction, e.g. 3.75% + 1.4% -> 0.0515."""
    return (interest_rate + repayment_rate) / HUNDRED


def monthly_payment(principal: Decimal, annual_payment_rate: Decimal) -> Decimal:
    """Fixed monthly payment over the 360-month term. Unrounded."""
    if principal <= 0:
        return ZERO
    if annual_payment_rate <= 0:
        return principal / TERM_MONTHS
    r = annual_payment_rate / 12
    # M = P * r / (1 - (1+r)^-n)
    return principal * r / (1 - (1 + r) ** -TERM_MONTHS)


def outstanding_balance(
    principal: Decimal,
    interest_rate: Decimal,
    repayment_rate: Decimal,
    elapsed_years: int,
) -> Decimal:
    """Balance after elapsed_years * 12 payments, floored at zero."""
    if principal <= 0:
        return ZERO
    months = elapsed_years * 12
    if months <= 0:
        return principal
    if months >= TERM_MONTHS:
        return ZERO

    rate = payment_rate(interest_rate, repayment_rate)
    pmt = monthly_payment(principal, rate)
    if rate <= 0:
        balance = principal - pmt * months
    else:
        r = rate / 12
        growth = (1 + r) ** months
        # B = P(1+r)^k - M((1+r)^k - 1)/r
        balance = principal * growth - pmt * (growth - 1) / r
    return max(ZERO, balance)


def loan_year(
    principal: Decimal,
    interest_rate: Decimal,
    repayment_rate: Decimal,
    elapsed_years: int,
) -> LoanYear:
    """Loan figures for year elapsed_years + 1.

    Payment is the start-of-year balance times the annual annuity rate;
    interest is the balance times the interest rate.
    """
    balance = outstanding_balance(principal, interest_rate, repayment_rate, elapsed_years)
    if balance <= 0:
        return LoanYear(balance=ZERO, payment=ZERO, interest=ZERO, principal=ZERO)

    payment = balance * payment_rate(interest_rate, repayment_rate)
    interest = balance * interest_rate / HUNDRED
    return LoanYear(
        balance=balance.quantize(TWO_PLACES, ROUND_HALF_UP),
        payment=payment.quantize(TWO_PLACES, ROUND_HALF_UP),
        interest=interest.quantize(TWO_PLACES, ROUND_HALF_UP),
        principal=(payment - interest).quantize(TWO_PLACES, ROUND_HALF_UP),
    )
