"""Domain constants and enumerations for validation."""

from enum import Enum
from typing import Set

FOREIGN_CURRENCY = "USD"
LOCAL_CURRENCY = "Bs"

PAYMENT_METHODS: Set[str] = {"cash", "debit", "transfer", "mixed"}
DISCOUNTED_PAYMENT_METHODS: Set[str] = {"cash"}


class RateSource(str, Enum):
    FETCHED = "fetched"
    MANUAL = "manual"


class SaleUnit(str, Enum):
    UNIT = "unit"
    WEIGHT = "weight"
    AREA = "area"


class Direction(str, Enum):
    FOREIGN_TO_LOCAL = "foreign_to_local"
    LOCAL_TO_FOREIGN = "local_to_foreign"

    def flipped(self) -> "Direction":
        if self is Direction.FOREIGN_TO_LOCAL:
            return Direction.LOCAL_TO_FOREIGN
        return Direction.FOREIGN_TO_LOCAL
