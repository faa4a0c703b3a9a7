"""Database models.

Importing this package registers every table on Base.metadata.
"""

from rental_billing.models.charge import ExtraCharge
from rental_billing.models.contract import Contract
from rental_billing.models.department import Department
from rental_billing.models.enums import MeterType, PaymentType, ReceiptStatus
from rental_billing.models.meter import DepartmentMeter
from rental_billing.models.meter_reading import MeterReading
from rental_billing.models.payment import Payment
from rental_billing.models.property import Property
from rental_billing.models.receipt import Receipt, ReceiptItem
from rental_billing.models.tenant import Tenant

__all__ = [
    "Contract",
    "Department",
    "DepartmentMeter",
    "ExtraCharge",
    "MeterReading",
    "MeterType",
    "Payment",
    "PaymentType",
    "Property",
    "Receipt",
    "ReceiptItem",
    "ReceiptStatus",
    "Tenant",
]
