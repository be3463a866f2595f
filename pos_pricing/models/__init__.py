"""Pydantic domain models for the pricing service."""

from .constants import (
    FOREIGN_CURRENCY,
    LOCAL_CURRENCY,
    PAYMENT_METHODS,
    Direction,
    RateSource,
    SaleUnit,
)  # re-export
from .rates import ExchangeRate, RateQuote
from .product import ProductPricing, PricedProduct
from .sales import CartLine, SaleRecord

__all__ = [
    "FOREIGN_CURRENCY",
    "LOCAL_CURRENCY",
    "PAYMENT_METHODS",
    "Direction",
    "RateSource",
    "SaleUnit",
    "ExchangeRate",
    "RateQuote",
    "ProductPricing",
    "PricedProduct",
    "CartLine",
    "SaleRecord",
]
