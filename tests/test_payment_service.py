"""
Tests for the mocked payment flow and invoices.
"""

import pytest
from datetime import datetime

from shining_star.exceptions import PaymentError
from shining_star.services.payment_service import PaymentService, BusinessInfo


@pytest.fixture
def payments():
    return PaymentService(BusinessInfo(
        name='Shining Star Cleaning',
        address='123 Main St, Philadelphia, PA',
        phone='555-0100',
        email='hello@example.com',
    ))


class TestTotals:
    def test_tax_on_subtotal_and_travel(self, payments):
        totals = payments.calculate_totals(50, 5.22)
        assert totals == {
            'subtotal': 50.0,
            'travelCost': 5.22,
            'discounts': 0.0,
            'tax': 4.42,
            'total': 59.64,
        }

    def test_discounts_reduce_taxable_amount(self, payments):
        totals = payments.calculate_totals(100, 0, 10)
        assert totals['tax'] == 7.2
        assert totals['total'] == 97.2

    def test_bad_amount(self, payments):
        with pytest.raises(PaymentError):
            payments.calculate_totals('lots')


class TestIntents:
    def test_create_intent(self, payments):
        intent = payments.create_payment_intent(59.64, metadata={'quote': 'x'})
        assert intent['id'].startswith('pi_')
        assert intent['amount'] == 5964
        assert intent['currency'] == 'usd'
        assert intent['status'] == 'requires_payment_method'
        assert intent['metadata']['quote'] == 'x'
        assert intent['metadata']['businessName'] == 'Shining Star Cleaning'

    @pytest.mark.parametrize("amount", [0, -5, 'abc', None])
    def test_invalid_amount(self, payments, amount):
        with pytest.raises(PaymentError):
            payments.create_payment_intent(amount)

    def test_process(self, payments):
        result = payments.process_payment('pi_123_abc', 'pm_card_visa')
        assert result['status'] == 'succeeded'
        assert result['paymentMethod'] == 'pm_card_visa'

    @pytest.mark.parametrize("intent_id,method", [
        ('ch_123', 'pm_card_visa'),
        ('', 'pm_card_visa'),
        ('pi_123', ''),
    ])
    def test_process_rejects_bad_input(self, payments, intent_id, method):
        with pytest.raises(PaymentError):
            payments.process_payment(intent_id, method)


class TestInvoice:
    def test_build_invoice(self, payments):
        invoice = payments.build_invoice(
            customer={'name': 'Jane'},
            line_items=[
                {'description': 'Deep Clean', 'total': 120},
                {'name': 'Windows', 'total': 30.5},
            ],
            travel_cost=5.22,
            issued=datetime(2024, 1, 15)
        )
        assert invoice['invoiceNumber'].startswith('INV-')
        assert invoice['date'] == '2024-01-15'
        assert invoice['dueDate'] == '2024-02-14'
        assert [item['description'] for item in invoice['lineItems']] == ['Deep Clean', 'Windows']
        assert invoice['totals']['subtotal'] == 150.5
        assert invoice['totals']['tax'] == 12.46
        assert invoice['totals']['total'] == 168.18

    def test_invoice_needs_items(self, payments):
        with pytest.raises(PaymentError):
            payments.build_invoice({'name': 'Jane'}, [])
