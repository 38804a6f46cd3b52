"""Synthetic fulfillment data for demos and tests."""

from .generator import DEFAULT_CATALOG, DEFAULT_CUSTOMERS, generate_fulfillments

__all__ = ["DEFAULT_CATALOG", "DEFAULT_CUSTOMERS", "generate_fulfillments"]
