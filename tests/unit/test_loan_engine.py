"""
Unit Tests for the Loan Ledger Engine.

These tests verify:
1. Loan origination for new loans and renewals
2. Inherited profit (profit heredado) on renewals
3. Payment distribution between profit and capital
4. Loan status derivation
5. Balance and portfolio helpers

Base loan used throughout: $3,000 at 40% for 14 weeks
- profit_amount: $1,200, total_debt_acquired: $4,200
- expected_weekly_payment: $300
- profit per $300 payment: $85.71, capital per payment: $214.29
"""

from datetime import date
from decimal import Decimal

import pytest

from loan_ledger.service.ledger import (
    LedgerSettings,
    LoanOriginationInput,
    LoanStatus,
    PaymentInput,
    PriorLoanState,
    calculate_amount_to_give,
    calculate_average_ticket,
    calculate_payment_distribution,
    calculate_payment_progress,
    calculate_pending_amount,
    calculate_profit,
    calculate_profit_heredado,
    calculate_profit_ratio,
    calculate_recovery_rate,
    create_loan,
    get_loan_status,
    is_loan_fully_paid,
    process_payment,
)


# =============================================================================
# Test Fixtures
# =============================================================================

BASE_INPUT = LoanOriginationInput(requested_amount=3000, rate="0.40", week_duration=14)


def prior_loan(pending) -> PriorLoanState:
    """Snapshot of the base loan with the given pending balance."""
    return PriorLoanState(
        pending_amount_stored=pending,
        profit_amount=1200,
        total_debt_acquired=4200,
    )


def payment(amount, pending=4200, profit=1200, total=4200, is_bad_debt=False) -> PaymentInput:
    return PaymentInput(
        amount=amount,
        loan_profit_amount=profit,
        loan_total_debt=total,
        loan_pending_amount=pending,
        is_bad_debt=is_bad_debt,
    )


# =============================================================================
# New Loan Tests
# =============================================================================

class TestCreateNewLoan:
    """Tests for create_loan() without a prior loan."""

    def test_basic_new_loan(self):
        """$3,000 at 40% over 14 weeks."""
        result = create_loan(BASE_INPUT)

        assert result.requested_amount == Decimal("3000")
        assert result.amount_gived == Decimal("3000")
        assert result.profit_base == Decimal("1200")
        assert result.profit_heredado == Decimal("0")
        assert result.profit_amount == Decimal("1200")
        assert result.return_to_capital == Decimal("3000")
        assert result.total_debt_acquired == Decimal("4200")
        assert result.pending_amount_stored == Decimal("4200")
        assert result.expected_weekly_payment == Decimal("300")
        assert result.profit_ratio == Decimal("0.2857")
        assert result.is_renewal is False

    def test_different_rate(self):
        result = create_loan(
            LoanOriginationInput(requested_amount=5000, rate="0.30", week_duration=10)
        )

        assert result.profit_base == Decimal("1500")
        assert result.total_debt_acquired == Decimal("6500")
        assert result.expected_weekly_payment == Decimal("650")

    def test_weekly_payment_with_cents(self):
        result = create_loan(
            LoanOriginationInput(requested_amount=1000, rate="0.25", week_duration=8)
        )

        assert result.total_debt_acquired == Decimal("1250")
        assert result.expected_weekly_payment == Decimal("156.25")

    def test_float_rate_is_not_binary_expanded(self):
        """A float rate of 0.40 must behave exactly like Decimal('0.40')."""
        from_float = create_loan(LoanOriginationInput(3000, 0.40, 14))
        from_str = create_loan(LoanOriginationInput(3000, "0.40", 14))

        assert from_float == from_str
        assert from_float.profit_base == Decimal("1200.00")

    def test_zero_week_duration(self):
        """Zero weeks yields a 0 installment instead of dividing by zero."""
        result = create_loan(LoanOriginationInput(3000, "0.40", 0))

        assert result.expected_weekly_payment == Decimal("0")
        assert result.total_debt_acquired == Decimal("4200")

    def test_zero_total_debt_has_zero_ratio(self):
        result = create_loan(LoanOriginationInput(0, "0.40", 14))

        assert result.total_debt_acquired == Decimal("0")
        assert result.profit_ratio == Decimal("0")

    def test_monetary_fields_rounded_to_cents(self):
        result = create_loan(LoanOriginationInput("1000.555", "0.333", 7))

        assert result.requested_amount == Decimal("1000.56")
        assert result.profit_base == Decimal("333.19")  # 1000.56 x 0.333 = 333.18648
        assert result.profit_base.as_tuple().exponent == -2
        assert result.expected_weekly_payment.as_tuple().exponent == -2

    def test_to_dict_renders_strings(self):
        data = create_loan(BASE_INPUT).to_dict()

        assert data["profit_amount"] == "1200.00"
        assert data["total_debt_acquired"] == "4200.00"
        assert data["profit_ratio"] == "0.2857"
        assert data["is_renewal"] is False


# =============================================================================
# Renewal Tests
# =============================================================================

class TestCreateRenewal:
    """Tests for create_loan() with a prior loan."""

    def test_renewal_after_10_of_14_payments(self):
        """$1,200 pending: only its profit portion (342.86) is inherited."""
        result = create_loan(BASE_INPUT, prior_loan(1200))

        assert result.profit_base == Decimal("1200")
        assert result.profit_heredado == Decimal("342.86")
        assert result.profit_amount == Decimal("1542.86")
        assert result.amount_gived == Decimal("1800")
        assert result.total_debt_acquired == Decimal("4542.86")
        assert result.pending_amount_stored == Decimal("4542.86")
        assert result.expected_weekly_payment == Decimal("324.49")
        assert result.profit_ratio == Decimal("0.3396")
        assert result.is_renewal is True

    def test_pending_balance_is_not_inherited_as_profit(self):
        """Regression: profit_heredado must never equal the raw pending balance."""
        result = create_loan(BASE_INPUT, prior_loan(1200))

        assert result.profit_heredado != Decimal("1200")
        assert result.profit_amount != Decimal("2400")
        assert result.total_debt_acquired != Decimal("5400")

    def test_renewal_after_0_payments(self):
        """Full debt pending: the whole original profit carries over."""
        result = create_loan(BASE_INPUT, prior_loan(4200))

        assert result.profit_heredado == Decimal("1200")
        assert result.profit_amount == Decimal("2400")
        assert result.amount_gived == Decimal("0")
        assert result.total_debt_acquired == Decimal("5400")

    def test_renewal_after_5_payments(self):
        result = create_loan(BASE_INPUT, prior_loan(2700))

        assert result.profit_heredado == Decimal("771.43")
        assert result.profit_amount == Decimal("1971.43")
        assert result.amount_gived == Decimal("300")

    def test_renewal_after_8_payments(self):
        result = create_loan(BASE_INPUT, prior_loan(1800))

        assert result.profit_heredado == Decimal("514.29")
        assert result.profit_amount == Decimal("1714.29")
        assert result.amount_gived == Decimal("1200")

    def test_fully_paid_prior_loan_inherits_nothing(self):
        result = create_loan(BASE_INPUT, prior_loan(0))

        assert result.profit_heredado == Decimal("0")
        assert result.amount_gived == Decimal("3000")
        assert result.total_debt_acquired == Decimal("4200")
        assert result.is_renewal is True

    def test_prior_loan_with_zero_total_debt(self):
        result = create_loan(
            BASE_INPUT,
            PriorLoanState(pending_amount_stored=500, profit_amount=0, total_debt_acquired=0),
        )

        assert result.profit_heredado == Decimal("0")
        assert result.amount_gived == Decimal("2500")

    def test_corrupt_prior_loan_does_not_crash(self):
        """Pending above total debt is the caller's problem, not an exception."""
        result = create_loan(
            BASE_INPUT,
            PriorLoanState(pending_amount_stored=9000, profit_amount=1200, total_debt_acquired=4200),
        )

        assert result.amount_gived == Decimal("0")
        assert result.profit_heredado == Decimal("2571.43")


# =============================================================================
# Payment Processing Tests
# =============================================================================

class TestProcessPayment:
    """Tests for process_payment()."""

    def test_regular_weekly_payment(self):
        result = process_payment(payment(300))

        assert result.amount == Decimal("300")
        assert result.profit_amount == Decimal("85.71")
        assert result.return_to_capital == Decimal("214.29")
        assert result.new_pending_amount == Decimal("3900")
        assert result.is_fully_paid is False

    def test_full_payoff(self):
        result = process_payment(payment(4200))

        assert result.profit_amount == Decimal("1200")
        assert result.return_to_capital == Decimal("3000")
        assert result.new_pending_amount == Decimal("0")
        assert result.is_fully_paid is True

    def test_payment_equal_to_pending(self):
        result = process_payment(payment(300, pending=300))

        assert result.new_pending_amount == Decimal("0")
        assert result.is_fully_paid is True

    def test_overpayment_floors_pending_at_zero(self):
        result = process_payment(payment(500, pending=300))

        assert result.new_pending_amount == Decimal("0")
        assert result.is_fully_paid is True
        assert result.profit_amount + result.return_to_capital == Decimal("500")

    def test_residual_within_epsilon_is_fully_paid(self):
        result = process_payment(payment(300, pending="300.01"))

        assert result.new_pending_amount == Decimal("0.01")
        assert result.is_fully_paid is True

    def test_residual_above_epsilon_is_not_fully_paid(self):
        result = process_payment(payment(300, pending="300.02"))

        assert result.new_pending_amount == Decimal("0.02")
        assert result.is_fully_paid is False

    def test_bad_debt_payment_is_all_profit(self):
        result = process_payment(payment(300, pending=1000, is_bad_debt=True))

        assert result.profit_amount == Decimal("300")
        assert result.return_to_capital == Decimal("0")
        assert result.new_pending_amount == Decimal("700")
        assert result.is_fully_paid is False

    def test_profit_capped_at_payment_for_corrupt_loan(self):
        """Loan profit above total debt must not produce profit > payment."""
        result = process_payment(payment(300, profit=5000, total=4200))

        assert result.profit_amount == Decimal("300")
        assert result.return_to_capital == Decimal("0")

    def test_zero_total_debt_goes_to_capital(self):
        result = process_payment(payment(300, profit=0, total=0))

        assert result.profit_amount == Decimal("0")
        assert result.return_to_capital == Decimal("300")

    def test_zero_payment_is_degenerate_but_valid(self):
        result = process_payment(payment(0))

        assert result.profit_amount == Decimal("0")
        assert result.return_to_capital == Decimal("0")
        assert result.new_pending_amount == Decimal("4200")

    def test_negative_payment_does_not_crash(self):
        result = process_payment(payment(-300))

        assert result.profit_amount <= result.amount
        assert result.profit_amount + result.return_to_capital == Decimal("-300")
        assert result.new_pending_amount >= 0

    def test_split_sums_exactly_for_awkward_amounts(self):
        result = process_payment(payment("333.33", profit="1542.86", total="4542.86"))

        assert result.profit_amount + result.return_to_capital == Decimal("333.33")

    def test_fourteen_weekly_payments_pay_off_loan(self):
        """Replaying the full schedule recognises the whole profit."""
        loan = create_loan(BASE_INPUT)
        pending = loan.pending_amount_stored
        total_profit = Decimal("0")
        total_capital = Decimal("0")

        for _ in range(14):
            result = process_payment(PaymentInput(
                amount=loan.expected_weekly_payment,
                loan_profit_amount=loan.profit_amount,
                loan_total_debt=loan.total_debt_acquired,
                loan_pending_amount=pending,
            ))
            pending = result.new_pending_amount
            total_profit += result.profit_amount
            total_capital += result.return_to_capital

        assert result.is_fully_paid is True
        assert pending == Decimal("0")
        assert total_profit + total_capital == Decimal("4200")
        assert abs(total_profit - Decimal("1200")) <= Decimal("0.14")

    def test_custom_epsilon(self):
        settings = LedgerSettings(fully_paid_epsilon="1.00")
        result = process_payment(payment(300, pending="300.50"), settings=settings)

        assert result.is_fully_paid is True

    def test_to_dict(self):
        data = process_payment(payment(300)).to_dict()

        assert data == {
            "amount": "300",
            "profit_amount": "85.71",
            "return_to_capital": "214.29",
            "new_pending_amount": "3900.00",
            "is_fully_paid": False,
        }


# =============================================================================
# Profit Helper Tests
# =============================================================================

class TestProfitRatio:
    """Tests for calculate_profit_ratio()."""

    def test_base_loan_ratio(self):
        ratio = calculate_profit_ratio(1200, 4200)
        assert ratio.quantize(Decimal("0.0001")) == Decimal("0.2857")

    def test_ratio_keeps_full_precision(self):
        ratio = calculate_profit_ratio(1200, 4200)
        assert abs(ratio * 4200 - 1200) < Decimal("1e-20")
        assert len(ratio.as_tuple().digits) > 4

    def test_zero_total_debt(self):
        assert calculate_profit_ratio(1200, 0) == Decimal("0")

    def test_negative_total_debt(self):
        assert calculate_profit_ratio(1200, -10) == Decimal("0")


class TestProfitHeredado:
    """Tests for calculate_profit_heredado()."""

    @pytest.mark.parametrize(
        "pending, expected",
        [
            (4200, Decimal("1200")),    # 0 payments
            (2700, Decimal("771.43")),  # 5 payments
            (1800, Decimal("514.29")),  # 8 payments
            (1200, Decimal("342.86")),  # 10 payments
            (0, Decimal("0")),
        ],
    )
    def test_base_loan_schedule(self, pending, expected):
        assert calculate_profit_heredado(pending, 1200, 4200) == expected

    def test_thirty_percent_loan(self):
        assert calculate_profit_heredado(1950, 900, 3900) == Decimal("450")

    def test_fifty_percent_loan(self):
        assert calculate_profit_heredado(2250, 1500, 4500) == Decimal("750")

    def test_zero_total_debt(self):
        assert calculate_profit_heredado(1000, 0, 0) == Decimal("0")


class TestPaymentDistribution:
    """Tests for calculate_payment_distribution()."""

    def test_base_ratio(self):
        dist = calculate_payment_distribution(300, "0.2857")

        assert dist.profit == Decimal("85.71")
        assert dist.return_to_capital == Decimal("214.29")

    def test_parts_sum_to_amount(self):
        dist = calculate_payment_distribution("420", calculate_profit_ratio(1200, 4200))

        assert dist.profit == Decimal("120")
        assert dist.profit + dist.return_to_capital == Decimal("420")

    def test_zero_ratio(self):
        dist = calculate_payment_distribution(300, 0)

        assert dist.profit == Decimal("0")
        assert dist.return_to_capital == Decimal("300")


class TestAmountHelpers:
    """Tests for calculate_profit() and calculate_amount_to_give()."""

    def test_calculate_profit(self):
        assert calculate_profit(3000, "0.40") == Decimal("1200")

    def test_amount_to_give(self):
        assert calculate_amount_to_give(3000, 1200) == Decimal("1800")

    def test_amount_to_give_never_negative(self):
        assert calculate_amount_to_give(3000, 4200) == Decimal("0")

    def test_amount_to_give_exact_match(self):
        assert calculate_amount_to_give(3000, 3000) == Decimal("0")


# =============================================================================
# Loan Status Tests
# =============================================================================

class TestGetLoanStatus:
    """Tests for get_loan_status()."""

    def test_active(self):
        assert get_loan_status(1200) is LoanStatus.ACTIVE

    def test_finished_at_zero(self):
        assert get_loan_status(0) is LoanStatus.FINISHED

    def test_finished_within_epsilon(self):
        assert get_loan_status("0.01") is LoanStatus.FINISHED

    def test_active_just_above_epsilon(self):
        assert get_loan_status("0.02") is LoanStatus.ACTIVE

    def test_bad_debt(self):
        assert get_loan_status(700, date(2024, 3, 1)) is LoanStatus.BAD_DEBT

    def test_paid_off_bad_debt_is_finished(self):
        """Payoff is checked before the bad-debt marker."""
        assert get_loan_status(0, date(2024, 3, 1)) is LoanStatus.FINISHED

    def test_status_compares_as_string(self):
        assert get_loan_status(1200) == "ACTIVE"
        assert LoanStatus.BAD_DEBT.value == "BAD_DEBT"


# =============================================================================
# Balance and Portfolio Helper Tests
# =============================================================================

class TestBalanceHelpers:
    """Tests for pending amount, payoff and progress helpers."""

    def test_pending_amount(self):
        assert calculate_pending_amount(4200, 3000) == Decimal("1200")

    def test_pending_amount_never_negative(self):
        assert calculate_pending_amount(4200, 5000) == Decimal("0")

    def test_is_loan_fully_paid(self):
        assert is_loan_fully_paid(4200, 4200) is True
        assert is_loan_fully_paid(4200, "4199.99") is False

    def test_payment_progress(self):
        assert calculate_payment_progress(4200, 2100) == Decimal("50.00")
        assert calculate_payment_progress(4200, 300) == Decimal("7.14")

    def test_payment_progress_zero_debt(self):
        assert calculate_payment_progress(0, 100) == Decimal("0")


class TestPortfolioHelpers:
    """Tests for recovery rate and average ticket."""

    def test_recovery_rate(self):
        assert calculate_recovery_rate(1000, 850) == Decimal("85.00")
        assert calculate_recovery_rate(3, 1) == Decimal("33.33")

    def test_recovery_rate_nothing_expected(self):
        assert calculate_recovery_rate(0, 500) == Decimal("0")

    def test_average_ticket(self):
        assert calculate_average_ticket(9000, 3) == Decimal("3000")
        assert calculate_average_ticket(1000, 3) == Decimal("333.33")

    def test_average_ticket_no_loans(self):
        assert calculate_average_ticket(9000, 0) == Decimal("0")
