from decimal import Decimal

from immo_analyzer.engine.debt import (
    TERM_MONTHS,
    loan_year,
    monthly_payment,
    outstanding_balance,
    payment_rate,
)

PRINCIPAL = Decimal("280210")
INTEREST = Decimal("3.75")
REPAYMENT = Decimal("1.4")


class TestMonthlyPayment:
    def test_standard_annuity(self):
        """100K at 6% annuity rate over 360 months: ~599.55."""
        pmt = monthly_payment(Decimal("100000"), Decimal("0.06"))
        assert pmt.quantize(Decimal("0.01")) == Decimal("599.55")

    def test_zero_rate_is_straight_line(self):
        pmt = monthly_payment(Decimal("360000"), Decimal("0"))
        assert pmt == Decimal("1000")

    def test_zero_principal(self):
        assert monthly_payment(Decimal("0"), Decimal("0.05")) == Decimal("0")

    def test_payment_rate_combines_interest_and_repayment(self):
        assert payment_rate(INTEREST, REPAYMENT) == Decimal("0.0515")


class TestOutstandingBalance:
    def test_year_zero_is_principal(self):
        assert outstanding_balance(PRINCIPAL, INTEREST, REPAYMENT, 0) == PRINCIPAL

    def test_non_increasing(self):
        balances = [outstanding_balance(PRINCIPAL, INTEREST, REPAYMENT, n) for n in range(41)]
        for prev, cur in zip(balances, balances[1:]):
            assert cur <= prev

    def test_strictly_decreasing_within_term(self):
        balances = [outstanding_balance(PRINCIPAL, INTEREST, REPAYMENT, n) for n in range(30)]
        for prev, cur in zip(balances, balances[1:]):
            assert cur < prev

    def test_zero_at_and_after_term(self):
        assert TERM_MONTHS == 360
        for n in (30, 31, 39):
            assert outstanding_balance(PRINCIPAL, INTEREST, REPAYMENT, n) == Decimal("0")

    def test_last_year_before_term_positive(self):
        assert outstanding_balance(PRINCIPAL, INTEREST, REPAYMENT, 29) > 0

    def test_zero_payment_rate(self):
        balance = outstanding_balance(Decimal("360000"), Decimal("0"), Decimal("0"), 15)
        assert balance == Decimal("180000")

    def test_zero_principal(self):
        assert outstanding_balance(Decimal("0"), INTEREST, REPAYMENT, 5) == Decimal("0")


class TestLoanYear:
    def test_first_year_split(self):
        """Year 1: payment = 5.15% of the balance, interest = 3.75%."""
        year = loan_year(PRINCIPAL, INTEREST, REPAYMENT, 0)
        assert year.balance == Decimal("280210.00")
        assert year.interest == Decimal("10507.88")  # 10507.875 rounded half up
        assert year.payment == Decimal("14430.82")  # 14430.815
        assert year.principal == Decimal("3922.94")

    def test_interest_share_declines(self):
        first = loan_year(PRINCIPAL, INTEREST, REPAYMENT, 0)
        tenth = loan_year(PRINCIPAL, INTEREST, REPAYMENT, 9)
        assert tenth.interest < first.interest
        assert tenth.payment < first.payment

    def test_paid_off_loan_is_all_zero(self):
        year = loan_year(PRINCIPAL, INTEREST, REPAYMENT, 30)
        assert year.balance == Decimal("0")
        assert year.payment == Decimal("0")
        assert year.interest == Decimal("0")
        assert year.principal == Decimal("0")
