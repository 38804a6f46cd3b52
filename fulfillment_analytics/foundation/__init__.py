"""Foundational building blocks for fulfillment analytics.

This package exposes the fulfillment record contract: the canonical
record type, the known status values and the success filter every
projection is computed from.
"""

from .records import (
    FulfillmentContract,
    FulfillmentRecord,
    FulfillmentStatus,
    RejectedRecord,
    ValidationResult,
    filter_successful,
    parse_timestamp,
)

__all__ = [
    "FulfillmentContract",
    "FulfillmentRecord",
    "FulfillmentStatus",
    "RejectedRecord",
    "ValidationResult",
    "filter_successful",
    "parse_timestamp",
]
