"""Rental billing service: consumption, monthly receipts and contract settlement."""
