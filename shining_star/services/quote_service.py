"""
Business logic for quote pricing.

Pure Python - no Flask dependencies, no I/O, no randomness.
The caller resolves the customer's distance before asking for a quote.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional
import logging

from shining_star.exceptions import DistanceUnavailable, InvalidSelection, ServiceUnavailable

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')

# Which selection field each calculation type reads
SELECTION_FIELDS = {
    'quantity': 'quantity',
    'area': 'area',
    'time': 'hours',
}


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half-up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_decimal(value: Any) -> Decimal:
    """Convert an int, float or numeric string to Decimal without float noise."""
    if isinstance(value, bool):
        raise InvalidOperation(f"boolean is not a number: {value}")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class PricingRules:
    """Constants of the travel surcharge and tax calculation"""
    free_miles: Decimal = Decimal('5')
    vehicle_mpg: Decimal = Decimal('23')
    gas_price_per_gallon: Decimal = Decimal('4.00')
    travel_markup: Decimal = Decimal('1.5')
    labor_rate: Decimal = Decimal('25')
    tax_rate: Decimal = Decimal('0.08')


@dataclass(frozen=True)
class Quote:
    """Price breakdown for a single service request. Never persisted."""
    service_id: str
    service_name: str
    calculation_type: str
    selection_field: Optional[str]
    selection_value: Optional[Decimal]
    distance_miles: Decimal
    service_cost: Decimal
    travel_cost: Decimal
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    details: str
    currency: str = 'USD'

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'serviceId': self.service_id,
            'serviceName': self.service_name,
            'calculationType': self.calculation_type,
            'distanceMiles': float(self.distance_miles),
            'serviceCost': float(self.service_cost),
            'travelCost': float(self.travel_cost),
            'subtotal': float(self.subtotal),
            'tax': float(self.tax),
            'total': float(self.total),
            'details': self.details,
            'currency': self.currency,
        }
        if self.selection_field:
            data[self.selection_field] = float(self.selection_value)
        return data


@dataclass
class Estimate:
    """Summed price of a cart of services and packages"""
    items: List[Dict[str, Any]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    total_price: Decimal = Decimal('0')
    total_duration: int = 0
    currency: str = 'USD'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'items': self.items,
            'skipped': self.skipped,
            'totalPrice': float(round_money(self.total_price)),
            'totalDuration': self.total_duration,
            'currency': self.currency,
        }


class QuoteService:
    """
    Service for pricing a single service request.

    All methods are pure functions of their inputs.
    """

    def __init__(self, rules: Optional[PricingRules] = None):
        self.rules = rules or PricingRules()

    def compute_travel_cost(self, distance_miles: Any) -> Decimal:
        """
        Travel surcharge for a round trip to the customer.

        The first free_miles are free; beyond that the round trip fuel cost
        is marked up and rounded to cents immediately.

        Args:
            distance_miles: One-way distance from the business address

        Returns:
            Travel cost in dollars, rounded half-up to cents

        Raises:
            DistanceUnavailable: distance negative, not finite or out of range
        """
        distance = to_decimal(distance_miles)
        if not distance.is_finite() or distance < 0:
            raise DistanceUnavailable(f"distance must be a non-negative number: {distance_miles}")

        if distance <= self.rules.free_miles:
            return Decimal('0.00')

        charge_miles = distance - self.rules.free_miles
        gallons = (charge_miles * 2) / self.rules.vehicle_mpg
        gas_cost = gallons * self.rules.gas_price_per_gallon
        try:
            return round_money(gas_cost * self.rules.travel_markup)
        except InvalidOperation as e:
            raise DistanceUnavailable(f"distance is out of range: {distance_miles}") from e

    def compute_quote(
        self,
        service: Dict[str, Any],
        selection: Optional[Dict[str, Any]],
        distance_miles: Any
    ) -> Quote:
        """
        Price a service request.

        Args:
            service: Service record
            selection: {'quantity': n} | {'area': sqft} | {'hours': h}, by calculation type
            distance_miles: Already-resolved one-way distance

        Returns:
            Quote

        Raises:
            ServiceUnavailable: service.available is False
            InvalidSelection: selection missing, non-positive, out of bounds or too large to price
            DistanceUnavailable: distance negative or not finite
        """
        if service.get('available') is False:
            raise ServiceUnavailable(f"Service {service.get('id')} is not available")

        selection = selection or {}
        calculation_type = service.get('calculationType') or 'fixed'
        price = to_decimal(service.get('price', 0))
        unit = service.get('unit') or ''

        selection_field = SELECTION_FIELDS.get(calculation_type)
        amount = None

        if calculation_type == 'quantity':
            amount = self._positive_amount(selection, 'quantity', calculation_type)
            if amount != amount.to_integral_value():
                raise InvalidSelection("quantity must be a whole number")
            max_quantity = service.get('maxQuantity')
            if max_quantity is not None and amount > to_decimal(max_quantity):
                raise InvalidSelection(f"quantity must be at most {max_quantity}")
            service_cost = price * amount
            plural = 's' if amount != 1 else ''
            details = f"{amount} {unit}{plural} x ${price}"

        elif calculation_type == 'area':
            amount = self._positive_amount(selection, 'area', calculation_type)
            min_area = service.get('minArea')
            max_area = service.get('maxArea')
            if min_area is not None and amount < to_decimal(min_area):
                raise InvalidSelection(f"area must be at least {min_area}")
            if max_area is not None and amount > to_decimal(max_area):
                raise InvalidSelection(f"area must be at most {max_area}")
            service_cost = price * amount
            details = f"{amount} {unit or 'sqft'} x ${price}"

        elif calculation_type == 'time':
            amount = self._positive_amount(selection, 'hours', calculation_type)
            service_cost = self.rules.labor_rate * amount
            details = f"{amount} hours x ${self.rules.labor_rate}/hour"

        else:
            # Fixed price, also the fallback for unrecognised types
            selection_field = None
            service_cost = price
            details = "Fixed price"

        distance = to_decimal(distance_miles)
        travel_cost = self.compute_travel_cost(distance)
        try:
            service_cost = round_money(service_cost)
            subtotal = round_money(service_cost + travel_cost)
            tax = round_money(subtotal * self.rules.tax_rate)
            total = round_money(subtotal + tax)
        except InvalidOperation as e:
            raise InvalidSelection("selection is too large to price") from e
        details = f"{details} = ${service_cost}"

        name = service.get('name')
        service_name = name.get('en', '') if isinstance(name, dict) else str(name or '')

        logger.debug(
            f"Quote for {service.get('id')}: service={service_cost} "
            f"travel={travel_cost} tax={tax} total={total}"
        )

        return Quote(
            service_id=service.get('id'),
            service_name=service_name,
            calculation_type=calculation_type,
            selection_field=selection_field,
            selection_value=amount,
            distance_miles=distance,
            service_cost=service_cost,
            travel_cost=travel_cost,
            subtotal=subtotal,
            tax=tax,
            total=total,
            details=details,
        )

    @staticmethod
    def _positive_amount(selection: Dict[str, Any], key: str, calculation_type: str) -> Decimal:
        raw = selection.get(key)
        if raw is None or raw == '':
            raise InvalidSelection(f"{key} is required for {calculation_type} services")
        try:
            amount = to_decimal(raw)
        except (InvalidOperation, ValueError):
            raise InvalidSelection(f"{key} must be a number")
        if not amount.is_finite():
            raise InvalidSelection(f"{key} must be a finite number")
        if amount <= 0:
            raise InvalidSelection(f"{key} must be greater than 0")
        return amount

    @staticmethod
    def estimate_selection(
        services: Iterable[Dict[str, Any]],
        packages: Iterable[Dict[str, Any]],
        service_ids: Optional[Iterable[str]] = None,
        package_ids: Optional[Iterable[str]] = None
    ) -> Estimate:
        """
        Sum the list prices of selected services and discounted packages.

        Unknown or unavailable ids, and entries that are not id strings,
        are skipped and reported back.
        """
        services_by_id = {s['id']: s for s in services}
        packages_by_id = {p['id']: p for p in packages}
        estimate = Estimate()

        for service_id in service_ids or []:
            service = services_by_id.get(service_id) if isinstance(service_id, str) else None
            if not service or service.get('available') is False:
                estimate.skipped.append(service_id)
                continue
            price = to_decimal(service['price'])
            estimate.total_price += price
            estimate.total_duration += int(service.get('duration') or 0)
            estimate.items.append({
                'type': 'service',
                'id': service['id'],
                'name': service.get('name'),
                'price': float(round_money(price)),
                'duration': service.get('duration'),
            })

        for package_id in package_ids or []:
            package = packages_by_id.get(package_id) if isinstance(package_id, str) else None
            if not package or package.get('available') is False:
                estimate.skipped.append(package_id)
                continue
            original = to_decimal(package['price'])
            discount = to_decimal(package.get('discount') or 0)
            price = original * (1 - discount / 100)
            estimate.total_price += price
            estimate.total_duration += int(package.get('duration') or 0)
            estimate.items.append({
                'type': 'package',
                'id': package['id'],
                'name': package.get('name'),
                'originalPrice': float(round_money(original)),
                'price': float(round_money(price)),
                'discount': float(discount),
                'duration': package.get('duration'),
            })

        if estimate.skipped:
            logger.info(f"Estimate skipped unavailable or unknown ids: {estimate.skipped}")
        return estimate


_default_service = QuoteService()


def compute_travel_cost(distance_miles: Any) -> Decimal:
    """Travel cost with the default pricing rules."""
    return _default_service.compute_travel_cost(distance_miles)


def compute_quote(service: Dict[str, Any], selection: Optional[Dict[str, Any]], distance_miles: Any) -> Quote:
    """Quote with the default pricing rules."""
    return _default_service.compute_quote(service, selection, distance_miles)
