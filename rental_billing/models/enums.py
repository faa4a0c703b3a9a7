"""Enum definitions for meters, payments and receipts."""

from enum import Enum


class MeterType(str, Enum):
    """Utility measured by a department meter."""

    LIGHT = "light"
    WATER = "water"


class PaymentType(str, Enum):
    """What a payment was made for."""

    RENT = "rent"
    WATER = "water"
    LIGHT = "light"
    ADVANCE = "advance"
    GUARANTEE = "guarantee"
    REFUND = "refund"


class ReceiptStatus(str, Enum):
    """Approval workflow state of an issued receipt."""

    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    DENIED = "denied"
