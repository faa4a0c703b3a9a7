"""Tests for monthly receipt calculation and the approval workflow."""

from datetime import date
from decimal import Decimal

import pytest
from fastapi import HTTPException

from rental_billing.models import MeterType, PaymentType, Receipt, ReceiptItem, ReceiptStatus
from rental_billing.services import receipt as receipt_service


def _descriptions(receipt) -> list[str]:
    return [item.description for item in receipt.items]


class TestMonthBounds:
    """Calendar month bounds used for billing periods."""

    def test_regular_month(self) -> None:
        assert receipt_service.month_bounds(4, 2024) == (date(2024, 4, 1), date(2024, 4, 30))

    def test_leap_february(self) -> None:
        assert receipt_service.month_bounds(2, 2024) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_december(self) -> None:
        assert receipt_service.month_bounds(12, 2023) == (date(2023, 12, 1), date(2023, 12, 31))


class TestCalculateReceipt:
    """Pricing of a contract's month."""

    def test_full_receipt(
        self, db, calculator, make_contract, add_meter, add_payment, add_extra_charge
    ) -> None:
        """Rent, utilities, extras and payments in their fixed order."""
        contract = make_contract()
        add_meter(
            contract.department_id,
            MeterType.LIGHT,
            [(date(2024, 3, 1), "100"), (date(2024, 3, 20), "140")],
        )
        add_meter(
            contract.department_id,
            MeterType.WATER,
            [(date(2024, 3, 1), "10"), (date(2024, 3, 31), "30")],
        )
        add_extra_charge(contract.id, "Broken window", "50.00", 3, 2024)
        add_payment(contract.id, "800.00", date(2024, 3, 5), PaymentType.RENT, "March rent")

        receipt = receipt_service.calculate_receipt(db, contract.id, 3, 2024, calculator)

        assert _descriptions(receipt) == [
            "Monthly Rent",
            "Electricity Consumption (40.00 units)",
            "Water Consumption (20.00 units)",
            "Other: Broken window",
            "Payment (rent) - March rent",
        ]
        assert [item.amount for item in receipt.items] == [
            Decimal("1000.00"),
            Decimal("10.00"),
            Decimal("3.00"),
            Decimal("50.00"),
            Decimal("-800.00"),
        ]
        assert receipt.total_due == Decimal("1063.00")
        assert receipt.total_payments == Decimal("800.00")
        assert receipt.balance == Decimal("-263.00")
        assert receipt.status == ReceiptStatus.PENDING_REVIEW
        assert receipt.period == "March 2024"
        assert receipt.tenant_name == contract.tenant.name
        assert receipt.property_address == contract.department.parent_property.address
        assert receipt.id is None

    def test_rent_only(self, db, calculator, make_contract) -> None:
        """No meters, charges or payments still yields a rent receipt."""
        contract = make_contract(rent_amount="750.00")

        receipt = receipt_service.calculate_receipt(db, contract.id, 1, 2024, calculator)

        assert _descriptions(receipt) == ["Monthly Rent"]
        assert receipt.total_due == Decimal("750.00")
        assert receipt.total_payments == Decimal("0")
        assert receipt.balance == Decimal("-750.00")

    @pytest.mark.parametrize(
        ("first", "last"),
        [("100", "100"), ("140", "100")],
        ids=["zero", "negative"],
    )
    def test_non_positive_consumption_is_not_billed(
        self, db, calculator, make_contract, add_meter, first, last
    ) -> None:
        """Zero or negative light consumption adds no line and no cost."""
        contract = make_contract()
        add_meter(
            contract.department_id,
            MeterType.LIGHT,
            [(date(2024, 2, 1), first), (date(2024, 2, 29), last)],
        )

        receipt = receipt_service.calculate_receipt(db, contract.id, 2, 2024, calculator)

        assert not any(d.startswith("Electricity") for d in _descriptions(receipt))
        assert receipt.total_due == Decimal("1000.00")

    def test_uses_period_readings_not_latest(
        self, db, calculator, make_contract, add_meter
    ) -> None:
        """Readings from a later month do not leak into an earlier receipt."""
        contract = make_contract()
        add_meter(
            contract.department_id,
            MeterType.LIGHT,
            [
                (date(2024, 1, 1), "100"),
                (date(2024, 1, 31), "120"),
                (date(2024, 2, 28), "300"),
            ],
        )

        receipt = receipt_service.calculate_receipt(db, contract.id, 1, 2024, calculator)

        assert "Electricity Consumption (20.00 units)" in _descriptions(receipt)
        assert receipt.total_due == Decimal("1005.00")

    def test_only_payments_in_month_count(
        self, db, calculator, make_contract, add_payment
    ) -> None:
        """Payments dated outside the month are left out."""
        contract = make_contract()
        add_payment(contract.id, "100.00", date(2024, 4, 30))
        add_payment(contract.id, "1000.00", date(2024, 5, 1))
        add_payment(contract.id, "20.00", date(2024, 5, 31), PaymentType.WATER)
        add_payment(contract.id, "300.00", date(2024, 6, 1))

        receipt = receipt_service.calculate_receipt(db, contract.id, 5, 2024, calculator)

        assert receipt.total_payments == Decimal("1020.00")
        assert receipt.balance == Decimal("20.00")
        assert "Payment (water) - N/A" in _descriptions(receipt)

    def test_extra_charges_scoped_to_month(
        self, db, calculator, make_contract, add_extra_charge
    ) -> None:
        """Charges for another month are not billed."""
        contract = make_contract()
        add_extra_charge(contract.id, "Cleaning", "25.00", 6, 2024)
        add_extra_charge(contract.id, "Parking", "40.00", 7, 2024)

        receipt = receipt_service.calculate_receipt(db, contract.id, 6, 2024, calculator)

        assert "Other: Cleaning" in _descriptions(receipt)
        assert "Other: Parking" not in _descriptions(receipt)
        assert receipt.total_due == Decimal("1025.00")

    def test_unknown_contract(self, db, calculator) -> None:
        """Calculating for a missing contract is a 404."""
        with pytest.raises(HTTPException) as exc_info:
            receipt_service.calculate_receipt(db, 9999, 1, 2024, calculator)
        assert exc_info.value.status_code == 404


class TestPreviewAndIssue:
    """Preview never writes; issue always recomputes and keeps status."""

    def test_preview_does_not_persist(self, db, calculator, make_contract) -> None:
        """Two previews agree and leave no receipt row behind."""
        contract = make_contract()

        first = receipt_service.preview_receipt(db, contract.id, 1, 2024, calculator)
        second = receipt_service.preview_receipt(db, contract.id, 1, 2024, calculator)

        assert first == second
        assert db.query(Receipt).count() == 0

    def test_issue_creates_pending_receipt(self, db, calculator, make_contract) -> None:
        """The first issue stores the receipt as pending review."""
        contract = make_contract()

        issued = receipt_service.issue_receipt(db, contract.id, 1, 2024, calculator)

        assert issued.id is not None
        assert issued.status == ReceiptStatus.PENDING_REVIEW
        assert db.query(Receipt).count() == 1

    def test_preview_returns_issued_receipt_verbatim(
        self, db, calculator, make_contract, add_extra_charge
    ) -> None:
        """Once issued, preview shows the stored numbers even if data changed."""
        contract = make_contract()
        issued = receipt_service.issue_receipt(db, contract.id, 1, 2024, calculator)
        add_extra_charge(contract.id, "Late fee", "30.00", 1, 2024)

        previewed = receipt_service.preview_receipt(db, contract.id, 1, 2024, calculator)

        assert previewed == issued
        assert previewed.total_due == Decimal("1000.00")

    def test_reissue_recomputes_and_keeps_approval(
        self, db, calculator, make_contract, add_extra_charge
    ) -> None:
        """An approved receipt stays approved when its numbers are regenerated."""
        contract = make_contract()
        first = receipt_service.issue_receipt(db, contract.id, 1, 2024, calculator)
        receipt_service.update_receipt_status(db, contract.id, 1, 2024, ReceiptStatus.APPROVED)
        add_extra_charge(contract.id, "Late fee", "30.00", 1, 2024)

        reissued = receipt_service.issue_receipt(db, contract.id, 1, 2024, calculator)

        assert reissued.id == first.id
        assert reissued.status == ReceiptStatus.APPROVED
        assert reissued.total_due == Decimal("1030.00")
        assert "Other: Late fee" in _descriptions(reissued)
        assert db.query(Receipt).count() == 1

    def test_reissue_keeps_denied_status(self, db, calculator, make_contract) -> None:
        """Recomputing never re-evaluates the workflow state."""
        contract = make_contract()
        receipt_service.issue_receipt(db, contract.id, 2, 2024, calculator)
        receipt_service.update_receipt_status(db, contract.id, 2, 2024, ReceiptStatus.DENIED)

        reissued = receipt_service.issue_receipt(db, contract.id, 2, 2024, calculator)

        assert reissued.status == ReceiptStatus.DENIED

    def test_snapshot_kept_until_reissued(self, db, calculator, make_contract) -> None:
        """Renaming the tenant does not alter an issued receipt."""
        contract = make_contract()
        receipt_service.issue_receipt(db, contract.id, 1, 2024, calculator)
        original_name = contract.tenant.name
        contract.tenant.name = "Renamed Tenant"
        db.commit()

        previewed = receipt_service.preview_receipt(db, contract.id, 1, 2024, calculator)

        assert previewed.tenant_name == original_name

    def test_concurrent_insert_conflicts(
        self, db, calculator, make_contract, add_extra_charge, monkeypatch
    ) -> None:
        """A row inserted after the lookup makes the issue fail with 409 and leaves it intact."""
        contract = make_contract()
        receipt_service.issue_receipt(db, contract.id, 1, 2024, calculator)
        receipt_service.update_receipt_status(db, contract.id, 1, 2024, ReceiptStatus.APPROVED)
        add_extra_charge(contract.id, "Late fee", "30.00", 1, 2024)
        # The lookup misses the row another writer has just committed.
        monkeypatch.setattr(receipt_service, "find_receipt", lambda *args: None)

        with pytest.raises(HTTPException) as exc_info:
            receipt_service.issue_receipt(db, contract.id, 1, 2024, calculator)

        assert exc_info.value.status_code == 409
        monkeypatch.undo()
        stored = db.query(Receipt).one()
        assert stored.status == ReceiptStatus.APPROVED
        assert stored.total_due == Decimal("1000.00")
        assert "Other: Late fee" not in [item.description for item in stored.get_items()]


class TestReceiptStatus:
    """Explicit status transitions."""

    def test_update_requires_issued_receipt(self, db, make_contract) -> None:
        """A receipt that was only previewed cannot be approved."""
        contract = make_contract()

        with pytest.raises(HTTPException) as exc_info:
            receipt_service.update_receipt_status(
                db, contract.id, 1, 2024, ReceiptStatus.APPROVED
            )
        assert exc_info.value.status_code == 404

    def test_status_round_trip(self, db, calculator, make_contract) -> None:
        """Approved receipts can go back to review and then be denied."""
        contract = make_contract()
        issued = receipt_service.issue_receipt(db, contract.id, 1, 2024, calculator)

        approved = receipt_service.update_receipt_status(
            db, contract.id, 1, 2024, ReceiptStatus.APPROVED
        )
        back = receipt_service.update_receipt_status(
            db, contract.id, 1, 2024, ReceiptStatus.PENDING_REVIEW
        )
        denied = receipt_service.update_receipt_status(
            db, contract.id, 1, 2024, ReceiptStatus.DENIED
        )

        assert approved.status == ReceiptStatus.APPROVED
        assert back.status == ReceiptStatus.PENDING_REVIEW
        assert denied.status == ReceiptStatus.DENIED
        assert denied.total_due == issued.total_due
        assert denied.items == issued.items


class TestPendingPayable:
    """Approved receipts with money still owed."""

    def _receipt(self, contract_id: int, month: int, status: ReceiptStatus, balance: str) -> Receipt:
        receipt = Receipt(
            contract_id=contract_id,
            month=month,
            year=2024,
            status=status,
            tenant_name="T",
            department_name="D",
            property_address="A",
            period=f"{month}/2024",
            total_payments=Decimal("0"),
            total_due=Decimal("0"),
            balance=Decimal(balance),
        )
        receipt.set_items([])
        return receipt

    def test_filter_and_order(self, db, make_contract) -> None:
        """Only approved negative balances, newest month first."""
        contract = make_contract()
        db.add_all(
            [
                self._receipt(contract.id, 1, ReceiptStatus.DENIED, "-50.00"),
                self._receipt(contract.id, 2, ReceiptStatus.APPROVED, "20.00"),
                self._receipt(contract.id, 3, ReceiptStatus.APPROVED, "-30.00"),
                self._receipt(contract.id, 4, ReceiptStatus.PENDING_REVIEW, "-10.00"),
                self._receipt(contract.id, 5, ReceiptStatus.APPROVED, "0.00"),
                self._receipt(contract.id, 6, ReceiptStatus.APPROVED, "-5.00"),
            ]
        )
        db.commit()

        pending = receipt_service.list_pending_payable(db)

        assert [(r.month, r.balance) for r in pending] == [
            (6, Decimal("-5.00")),
            (3, Decimal("-30.00")),
        ]


class TestReceiptItemCodec:
    """Items survive storage as typed values in order."""

    def test_round_trip_keeps_order_and_precision(self) -> None:
        receipt = Receipt()
        items = [
            ReceiptItem("Monthly Rent", Decimal("1000.00")),
            ReceiptItem("Payment (rent) - N/A", Decimal("-999.99")),
        ]

        receipt.set_items(items)

        assert receipt.get_items() == items
        assert isinstance(receipt.get_items()[1].amount, Decimal)
