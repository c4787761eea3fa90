# backend/services/pricing.py
"""
Delivery price estimation.

The server recomputes every logistics price from these tables; a price sent by
the client is never stored.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Union

from models.enums import DeliverySpeed, PackageType
from services.errors import ValidationError

Number = Union[int, float, Decimal, str]

SPEED_MULTIPLIERS: Dict[DeliverySpeed, Decimal] = {
    DeliverySpeed.STANDARD: Decimal("1"),
    DeliverySpeed.EXPRESS: Decimal("1.5"),
    DeliverySpeed.SAME_DAY: Decimal("2"),
}

PACKAGE_BASE_PRICES: Dict[PackageType, Decimal] = {
    PackageType.SMALL: Decimal("2500"),
    PackageType.MEDIUM: Decimal("5000"),
    PackageType.LARGE: Decimal("10000"),
    PackageType.EXTRA_LARGE: Decimal("15000"),
    PackageType.FRAGILE: Decimal("8000"),
}

WEIGHT_BASE_PRICE = Decimal("5000")
PRICE_PER_KG = Decimal("100")

_CENTS = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def parse_speed(speed: Union[str, DeliverySpeed, None]) -> DeliverySpeed:
    if isinstance(speed, DeliverySpeed):
        return speed
    if not speed:
        return DeliverySpeed.STANDARD
    key = str(speed).strip().upper().replace("-", "_").replace(" ", "_")
    try:
        return DeliverySpeed(key)
    except ValueError:
        raise ValidationError(f"Unknown delivery speed: {speed}")


def parse_package_type(package_type: Union[str, PackageType, None]) -> Optional[PackageType]:
    """Known tier or None (free-text package types fall back to weight pricing)."""
    if isinstance(package_type, PackageType):
        return package_type
    if not package_type:
        return None
    key = str(package_type).strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return PackageType(key)
    except ValueError:
        return None


def speed_multiplier(speed) -> Decimal:
    return SPEED_MULTIPLIERS[parse_speed(speed)]


def price_for_tier(package_type, speed) -> Decimal:
    tier = parse_package_type(package_type)
    if tier is None:
        raise ValidationError(f"Unknown package type: {package_type}")
    return _money(PACKAGE_BASE_PRICES[tier] * speed_multiplier(speed))


def parse_weight(weight: Optional[Number]) -> Decimal:
    """Weight in kg as a finite, non-negative Decimal (None counts as 0)."""
    try:
        kg = Decimal(str(0 if weight is None else weight))
    except ArithmeticError:
        raise ValidationError(f"Invalid weight: {weight}")
    if not kg.is_finite():
        raise ValidationError(f"Invalid weight: {weight}")
    if kg < 0:
        raise ValidationError("Weight must be >= 0")
    return kg


def price_for_weight(weight: Number, speed) -> Decimal:
    kg = parse_weight(weight)
    return _money((WEIGHT_BASE_PRICE + PRICE_PER_KG * kg) * speed_multiplier(speed))


def estimate_delivery_price(speed, package_type=None, weight: Optional[Number] = None) -> Decimal:
    """Tier table when the package type is a known tier, weight formula otherwise."""
    if parse_package_type(package_type) is not None:
        return price_for_tier(package_type, speed)
    return price_for_weight(weight or 0, speed)


def quote(speed, package_type=None, weight: Optional[Number] = None) -> dict:
    kg = parse_weight(weight)
    tier = parse_package_type(package_type)
    multiplier = speed_multiplier(speed)
    if tier is not None:
        base = PACKAGE_BASE_PRICES[tier]
    else:
        base = WEIGHT_BASE_PRICE + PRICE_PER_KG * kg
    return {
        "speed": parse_speed(speed).value,
        "package_type": tier.value if tier else package_type,
        "weight": float(kg),
        "multiplier": float(multiplier),
        "base_price": float(_money(base)),
        "estimated_price": float(estimate_delivery_price(speed, package_type, weight)),
    }
