"""Fulfillment record contract and success filter.

A fulfillment record is one reward item delivered (or not) to a customer.
Upstream systems hand us these as dictionaries with inconsistent field
names and timestamp encodings; the contract canonicalises them into
:class:`FulfillmentRecord` values and rejects anything malformed without
aborting the rest of the batch.

Quick Start
-----------
>>> from datetime import datetime
>>> from fulfillment_analytics.foundation.records import filter_successful
>>> records = [
...     {"itemName": "Mug", "quantity": 2, "creationTimestamp": "2024-01-05T10:00:00Z",
...      "customerName": "Acme", "status": "Success"},
...     {"itemName": "Mug", "quantity": 1, "creationTimestamp": "2024-01-06T10:00:00Z",
...      "customerName": "Acme", "status": "Failed"},
... ]
>>> [r.item_name for r in filter_successful(records)]
['Mug']
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping, Union

logger = logging.getLogger(__name__)


class FulfillmentStatus(str, Enum):
    """Known fulfillment outcomes. Only ``SUCCESS`` is counted downstream."""

    SUCCESS = "Success"
    FAILED = "Failed"
    PENDING = "Pending"
    CANCELLED = "Cancelled"


RawRecord = Union["FulfillmentRecord", Mapping[str, Any]]

# Accepted spellings for each canonical field, in lookup order.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "item_name": ("item_name", "itemName", "item"),
    "quantity": ("quantity", "qty"),
    "created_at": ("created_at", "creationTimestamp", "creation_timestamp"),
    "customer_name": ("customer_name", "customerName", "customer"),
    "status": ("status",),
}


@dataclass(frozen=True)
class FulfillmentRecord:
    """Canonical representation of a single fulfillment transaction.

    Attributes
    ----------
    item_name:
        Identifier of the fulfilled catalog item.
    quantity:
        Units fulfilled in this record (non-negative).
    created_at:
        When the fulfillment occurred.
    customer_name:
        Identifier of the requesting customer.
    status:
        Outcome of the fulfillment. Known outcomes given as strings are
        normalised to :class:`FulfillmentStatus` regardless of case; unknown
        outcomes are kept as raw strings.
    """

    item_name: str
    quantity: int
    created_at: datetime
    customer_name: str
    status: FulfillmentStatus | str = FulfillmentStatus.SUCCESS

    def __post_init__(self) -> None:
        if not self.item_name:
            raise ValueError("item_name cannot be empty")
        if not self.customer_name:
            raise ValueError("customer_name cannot be empty")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise TypeError(f"quantity must be an int: {self.quantity!r}")
        if self.quantity < 0:
            raise ValueError(f"quantity cannot be negative: {self.quantity}")
        if not isinstance(self.created_at, datetime):
            raise TypeError(
                f"created_at must be a datetime instance: {self.created_at!r}"
            )
        # NaT is the only datetime not equal to itself
        if self.created_at != self.created_at:
            raise ValueError(f"created_at is not a valid point in time: {self.created_at!r}")
        if not isinstance(self.status, FulfillmentStatus):
            object.__setattr__(self, "status", parse_status(self.status))

    @property
    def is_successful(self) -> bool:
        return self.status == FulfillmentStatus.SUCCESS

    def as_dict(self) -> dict[str, object]:
        status = self.status
        return {
            "item_name": self.item_name,
            "quantity": self.quantity,
            "created_at": self.created_at.isoformat(),
            "customer_name": self.customer_name,
            "status": status.value if isinstance(status, FulfillmentStatus) else status,
        }


@dataclass(frozen=True)
class RejectedRecord:
    """A raw record that failed the contract, with the reason."""

    index: int
    reason: str


@dataclass
class ValidationResult:
    """Records accepted by the contract plus the ones it rejected."""

    records: list[FulfillmentRecord] = field(default_factory=list)
    rejected: list[RejectedRecord] = field(default_factory=list)


def parse_timestamp(value: object) -> datetime:
    """Coerce a datetime, ISO-8601 string or epoch seconds into a datetime.

    Raises
    ------
    ValueError:
        If the value cannot be interpreted as a point in time.
    """
    if isinstance(value, datetime):
        if value != value:
            raise ValueError(f"Unparseable timestamp: {value!r}")
        return value
    if isinstance(value, bool):
        raise ValueError(f"Unparseable timestamp: {value!r}")
    if isinstance(value, numbers.Real):
        try:
            return datetime.fromtimestamp(float(value), tz=timezone.utc)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"Unparseable timestamp: {value!r}") from exc
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError(f"Unparseable timestamp: {value!r}") from exc
    raise ValueError(f"Unparseable timestamp: {value!r}")


def parse_status(value: object) -> FulfillmentStatus | str:
    if isinstance(value, FulfillmentStatus):
        return value
    text = str(value).strip() if value is not None else ""
    for status in FulfillmentStatus:
        if text.lower() == status.value.lower():
            return status
    return text


def _lookup(data: Mapping[str, Any], canonical: str) -> Any:
    for alias in FIELD_ALIASES[canonical]:
        if alias in data:
            return data[alias]
    return None


class FulfillmentContract:
    """Validate raw fulfillment payloads into canonical records."""

    #: Fields that must be present on every raw record.
    REQUIRED_FIELDS = ("item_name", "quantity", "created_at", "customer_name", "status")

    def validate_records(self, records: Iterable[RawRecord] | None) -> ValidationResult:
        """Validate raw records, excluding (and logging) malformed ones.

        Parameters
        ----------
        records:
            Iterable of :class:`FulfillmentRecord` instances or mappings as
            produced by the upstream retrieval. ``None`` is treated as an
            empty collection.

        Returns
        -------
        ValidationResult
            Accepted records in input order, plus per-index rejections.
        """
        result = ValidationResult()
        if records is None:
            return result

        for idx, record in enumerate(records):
            if isinstance(record, FulfillmentRecord):
                result.records.append(record)
                continue
            try:
                result.records.append(self._canonicalise(record))
            except (KeyError, TypeError, ValueError) as exc:
                reason = str(exc.args[0]) if exc.args else type(exc).__name__
                result.rejected.append(RejectedRecord(index=idx, reason=reason))

        if result.rejected:
            logger.warning(
                f"Rejected {len(result.rejected)} malformed fulfillment record(s); "
                f"first rejection at index {result.rejected[0].index}: "
                f"{result.rejected[0].reason}"
            )
        return result

    def _canonicalise(self, record: object) -> FulfillmentRecord:
        if not isinstance(record, Mapping):
            raise TypeError(f"Record must be a mapping, got {type(record).__name__}")

        values = {name: _lookup(record, name) for name in self.REQUIRED_FIELDS}
        missing = [name for name, value in values.items() if value is None]
        if missing:
            raise KeyError(f"Missing required fields: {', '.join(missing)}")

        quantity = values["quantity"]
        if isinstance(quantity, bool):
            raise TypeError(f"quantity must be numeric: {quantity!r}")
        if isinstance(quantity, numbers.Integral):
            quantity = int(quantity)
        elif isinstance(quantity, float):
            if not quantity.is_integer():
                raise ValueError(f"quantity must be a whole number: {quantity}")
            quantity = int(quantity)
        elif isinstance(quantity, str):
            try:
                quantity = int(quantity.strip())
            except ValueError as exc:
                raise ValueError(f"quantity must be a whole number: {quantity!r}") from exc

        return FulfillmentRecord(
            item_name=str(values["item_name"]).strip(),
            quantity=quantity,
            created_at=parse_timestamp(values["created_at"]),
            customer_name=str(values["customer_name"]).strip(),
            status=parse_status(values["status"]),
        )


def filter_successful(records: Iterable[RawRecord] | None) -> list[FulfillmentRecord]:
    """Return the well-formed records whose status is ``Success``.

    Malformed records are excluded rather than raised; ``None`` or an
    empty input yields an empty list.
    """
    validated = FulfillmentContract().validate_records(records)
    return [record for record in validated.records if record.is_successful]
