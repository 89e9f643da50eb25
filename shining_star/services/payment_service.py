"""
Mocked payment flow and invoice data.

No payment provider is contacted: intents and confirmations are simulated
so the booking pages can be exercised end to end.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional
import logging
import secrets
import string
import time

from shining_star.exceptions import PaymentError
from shining_star.services.quote_service import round_money, to_decimal, PricingRules

logger = logging.getLogger(__name__)

INVOICE_DUE_DAYS = 30

_ID_ALPHABET = string.ascii_lowercase + string.digits


def _random_suffix(length: int = 9) -> str:
    return ''.join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def _millis() -> int:
    return int(time.time() * 1000)


def _money(value: Any, field: str) -> Decimal:
    try:
        amount = to_decimal(value)
    except (InvalidOperation, ValueError) as e:
        raise PaymentError(f"{field} must be a number") from e
    if not amount.is_finite():
        raise PaymentError(f"{field} must be a number")
    return round_money(amount)


@dataclass
class BusinessInfo:
    name: str
    address: str
    phone: str
    email: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'name': self.name,
            'address': self.address,
            'phone': self.phone,
            'email': self.email,
        }


class PaymentService:
    """Simulated payment intents, confirmations and invoices."""

    def __init__(self, business: BusinessInfo, rules: Optional[PricingRules] = None):
        self.business = business
        self.rules = rules or PricingRules()

    def calculate_totals(self, subtotal: Any, travel_cost: Any = 0, discounts: Any = 0) -> Dict[str, float]:
        """
        Invoice totals with tax.

        Same rounding order as a quote: each component rounded once,
        tax taken from the rounded taxable amount.
        """
        subtotal = _money(subtotal, 'subtotal')
        travel_cost = _money(travel_cost, 'travelCost')
        discounts = _money(discounts, 'discounts')
        if discounts < 0:
            raise PaymentError("discounts must not be negative")

        taxable = round_money(subtotal + travel_cost - discounts)
        tax = round_money(taxable * self.rules.tax_rate)
        total = round_money(taxable + tax)
        return {
            'subtotal': float(subtotal),
            'travelCost': float(travel_cost),
            'discounts': float(discounts),
            'tax': float(tax),
            'total': float(total),
        }

    def create_payment_intent(
        self,
        amount: Any,
        currency: str = 'USD',
        metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Create a mock payment intent.

        Args:
            amount: Amount in dollars
            currency: ISO currency code
            metadata: Free-form data echoed back on the intent

        Returns:
            Intent dict with amount in cents
        """
        amount = _money(amount, 'amount')
        if amount <= 0:
            raise PaymentError("amount must be greater than 0")

        stamp = _millis()
        intent = {
            'id': f"pi_{stamp}_{_random_suffix()}",
            'clientSecret': f"pi_{stamp}_secret_{_random_suffix()}",
            'amount': int(amount * 100),
            'currency': currency.lower(),
            'status': 'requires_payment_method',
            'metadata': {
                **(metadata or {}),
                'businessName': self.business.name,
                'businessAddress': self.business.address,
                'timestamp': datetime.utcnow().isoformat(),
            },
        }
        logger.info(f"Created mock payment intent {intent['id']} for {intent['amount']} cents")
        return intent

    def process_payment(self, intent_id: str, payment_method_id: str) -> Dict[str, Any]:
        """Confirm a mock intent. Always succeeds for well-formed ids."""
        if not intent_id or not str(intent_id).startswith('pi_'):
            raise PaymentError("invalid payment intent id")
        if not payment_method_id:
            raise PaymentError("payment method is required")

        logger.info(f"Processed mock payment {intent_id}")
        return {
            'id': intent_id,
            'status': 'succeeded',
            'currency': 'usd',
            'paymentMethod': payment_method_id,
            'processedAt': datetime.utcnow().isoformat(),
        }

    def build_invoice(
        self,
        customer: Dict[str, Any],
        line_items: List[Dict[str, Any]],
        travel_cost: Any = 0,
        payment: Optional[Dict[str, Any]] = None,
        issued: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Assemble invoice data for rendering.

        Args:
            customer: name, email, phone, address
            line_items: each with description and total
            travel_cost: travel surcharge from the quote
            payment: processed payment result, if any
            issued: issue date, defaults to now

        Returns:
            Invoice dict
        """
        if not line_items:
            raise PaymentError("invoice needs at least one line item")

        subtotal = Decimal('0')
        items = []
        for item in line_items:
            item_total = _money(item.get('total', 0), 'item total')
            subtotal += item_total
            items.append({
                'description': item.get('description') or item.get('name') or 'Service',
                'details': item.get('details', ''),
                'total': float(item_total),
            })

        issued = issued or datetime.now()
        return {
            'invoiceNumber': f"INV-{_millis()}",
            'date': issued.strftime('%Y-%m-%d'),
            'dueDate': (issued + timedelta(days=INVOICE_DUE_DAYS)).strftime('%Y-%m-%d'),
            'businessInfo': self.business.to_dict(),
            'customerInfo': customer,
            'lineItems': items,
            'payment': payment,
            'totals': self.calculate_totals(subtotal, travel_cost),
        }
