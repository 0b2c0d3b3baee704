# app/pricing.py

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple

from db.models import PackagePricing, ServicePackage, VehicleSize

NOT_SET = "Not set"


def format_price(value: Decimal, decimals: int = 0) -> str:
    """$120 on package cards, $120.00 with decimals=2 for the edit form."""
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"${rounded:,.{decimals}f}"


class PriceBook:
    """Per-vehicle-size prices for the service packages.

    A stored price of 0 counts as unset, so the package's legacy price
    range is shown instead.
    """

    def __init__(
        self,
        packages: List[ServicePackage],
        vehicle_sizes: List[VehicleSize],
        pricing: List[PackagePricing],
    ) -> None:
        self.packages: Dict[str, ServicePackage] = {p.id: p for p in packages}
        self.vehicle_sizes = sorted(vehicle_sizes, key=lambda s: (s.display_order, s.id))
        self._size_ids = {s.id for s in self.vehicle_sizes}
        self._prices: Dict[Tuple[str, str], Decimal] = {
            (row.package_id, row.vehicle_size_id): row.price for row in pricing
        }

    def default_vehicle_size_id(self) -> Optional[str]:
        return self.vehicle_sizes[0].id if self.vehicle_sizes else None

    def _legacy(self, package_id: str) -> str:
        package = self.packages.get(package_id)
        return package.legacy_price_range if package else NOT_SET

    def _set_price(self, package_id: str, vehicle_size_id: Optional[str]) -> Optional[Decimal]:
        if package_id not in self.packages or vehicle_size_id not in self._size_ids:
            return None
        price = self._prices.get((package_id, vehicle_size_id))
        if price is None or price <= 0:
            return None
        return price

    def resolve_price(self, package_id: str, vehicle_size_id: Optional[str] = None) -> str:
        if vehicle_size_id is None:
            vehicle_size_id = self.default_vehicle_size_id()
        price = self._set_price(package_id, vehicle_size_id)
        if price is None:
            return self._legacy(package_id)
        return format_price(price)

    def editable_price(self, package_id: str, vehicle_size_id: str) -> Decimal:
        price = self._set_price(package_id, vehicle_size_id)
        if price is None:
            return Decimal("0.00")
        return price.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def price_range_summary(self, package_id: str) -> str:
        prices = [
            price
            for (pkg_id, size_id), price in self._prices.items()
            if pkg_id == package_id and size_id in self._size_ids and price > 0
        ]
        if not prices:
            return NOT_SET
        low, high = min(prices), max(prices)
        if low == high:
            return format_price(low)
        return f"{format_price(low)} - {format_price(high)}"
