"""Tests for the final contract settlement."""

from datetime import date
from decimal import Decimal

import pytest
from fastapi import HTTPException

from rental_billing.models import PaymentType
from rental_billing.services.settlement import calculate_final_settlement, count_accrual_months


class TestCountAccrualMonths:
    """Monthly rent accruals between two dates, both inclusive."""

    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            (date(2024, 1, 1), date(2024, 1, 1), 1),
            (date(2024, 1, 1), date(2024, 1, 31), 1),
            (date(2024, 1, 1), date(2024, 2, 1), 2),
            (date(2024, 1, 1), date(2024, 3, 31), 3),
            (date(2024, 1, 1), date(2024, 4, 20), 4),
            (date(2024, 1, 15), date(2024, 2, 14), 1),
            (date(2024, 1, 15), date(2024, 2, 15), 2),
            (date(2023, 11, 10), date(2024, 2, 9), 3),
            (date(2024, 1, 31), date(2024, 2, 29), 2),
            (date(2024, 1, 31), date(2024, 3, 30), 2),
            (date(2024, 1, 31), date(2024, 3, 31), 3),
            (date(2024, 3, 1), date(2024, 2, 28), 0),
        ],
    )
    def test_counts(self, start: date, end: date, expected: int) -> None:
        assert count_accrual_months(start, end) == expected

    def test_month_end_start_clamps_instead_of_overflowing(self) -> None:
        """A contract from Jan 31 accrues again on Feb 29, not on Mar 2.

        Moving out on Mar 1 therefore pays for two months.
        """
        assert count_accrual_months(date(2024, 1, 31), date(2024, 2, 28)) == 1
        assert count_accrual_months(date(2024, 1, 31), date(2024, 3, 1)) == 2


class TestFinalSettlement:
    """Settlement of rent, payments and overstay."""

    def test_no_overstay(self, db, make_contract) -> None:
        """Leaving on the end date charges Jan, Feb and Mar only."""
        contract = make_contract(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 3, 31),
            rent_amount="1000.00",
            guarantee_deposit="500.00",
        )

        result = calculate_final_settlement(db, contract.id, date(2024, 3, 31))

        assert result.months_charged == 3
        assert result.total_charges == Decimal("3000.00")
        assert result.guarantee_deduction == Decimal("0")
        assert result.days_overstayed == 0
        assert result.advance_payment_used is False

    def test_overstay_capped_at_deposit(self, db, make_contract) -> None:
        """20 days at 33.33 per day would be 666.67, capped to the 500 deposit."""
        contract = make_contract(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 3, 31),
            rent_amount="1000.00",
            guarantee_deposit="500.00",
        )

        result = calculate_final_settlement(db, contract.id, date(2024, 4, 20))

        assert result.days_overstayed == 20
        assert result.daily_rent == Decimal("33.33")
        assert result.months_charged == 4
        assert result.guarantee_deduction == Decimal("500.00")
        assert result.total_charges == Decimal("4500.00")

    def test_overstay_below_cap(self, db, make_contract) -> None:
        """A short overstay is charged at the daily rate."""
        contract = make_contract(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 3, 31),
            rent_amount="900.00",
            guarantee_deposit="900.00",
        )

        result = calculate_final_settlement(db, contract.id, date(2024, 4, 3))

        assert result.days_overstayed == 3
        assert result.guarantee_deduction == Decimal("90.00")
        assert result.total_charges == Decimal("3690.00")

    def test_early_exit_still_charges_full_term(self, db, make_contract) -> None:
        """Leaving early accrues rent up to the contract end date."""
        contract = make_contract(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 6, 30),
            rent_amount="1000.00",
        )

        result = calculate_final_settlement(db, contract.id, date(2024, 2, 10))

        assert result.months_charged == 6
        assert result.total_charges == Decimal("6000.00")
        assert result.guarantee_deduction == Decimal("0")

    def test_all_payments_count(self, db, make_contract, add_payment) -> None:
        """Every payment ever made counts; overpaying gives a positive balance."""
        contract = make_contract(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 3, 31),
            rent_amount="1000.00",
        )
        add_payment(contract.id, "1000.00", date(2023, 12, 20), PaymentType.ADVANCE)
        add_payment(contract.id, "500.00", date(2023, 12, 20), PaymentType.GUARANTEE)
        add_payment(contract.id, "1000.00", date(2024, 2, 1))
        add_payment(contract.id, "1000.00", date(2024, 3, 1))

        result = calculate_final_settlement(db, contract.id, date(2024, 3, 31))

        assert result.total_payments == Decimal("3500.00")
        assert result.final_balance == Decimal("500.00")

    def test_underpaying_gives_negative_balance(
        self, db, make_contract, add_payment
    ) -> None:
        """A tenant who still owes ends with a negative final balance."""
        contract = make_contract(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 2, 29),
            rent_amount="1000.00",
        )
        add_payment(contract.id, "1200.00", date(2024, 1, 5))

        result = calculate_final_settlement(db, contract.id, date(2024, 2, 29))

        assert result.final_balance == Decimal("-800.00")
        assert result.final_balance == result.total_payments - result.total_charges

    def test_unknown_contract(self, db) -> None:
        """Settling a missing contract is a 404."""
        with pytest.raises(HTTPException) as exc_info:
            calculate_final_settlement(db, 9999, date(2024, 1, 1))
        assert exc_info.value.status_code == 404
