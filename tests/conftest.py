"""Shared fixtures for fulfillment analytics tests."""

from datetime import datetime

import pytest
import structlog

from fulfillment_analytics.foundation.records import FulfillmentRecord, FulfillmentStatus


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sample_records():
    """Mixed-status records spanning two months and two years."""
    return [
        FulfillmentRecord("Mug", 3, datetime(2023, 1, 10), "Acme"),
        FulfillmentRecord("Hoodie", 5, datetime(2023, 1, 20), "Globex"),
        FulfillmentRecord("Mug", 2, datetime(2023, 2, 3), "Acme", FulfillmentStatus.FAILED),
        FulfillmentRecord("Mug", 4, datetime(2023, 2, 14), "Initech"),
        FulfillmentRecord("Backpack", 1, datetime(2024, 1, 5), "Globex"),
    ]
