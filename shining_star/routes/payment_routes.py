"""
Mocked payment flow: payment page, intents, confirmation and invoices.
"""

from flask import (
    Blueprint, request, render_template, current_app, send_from_directory, abort
)
import logging
import os
import re

from shining_star.exceptions import PaymentError
from shining_star.services.payment_service import PaymentService, BusinessInfo
from shining_star.utils.response_helpers import success_response

logger = logging.getLogger(__name__)

payment_bp = Blueprint('payment', __name__)

INVOICE_NUMBER_PATTERN = re.compile(r'^INV-\d+$')


def get_payment_service():
    config = current_app.config
    business = BusinessInfo(
        name=config['BUSINESS_NAME'],
        address=config['BUSINESS_ADDRESS'],
        phone=config['BUSINESS_PHONE'],
        email=config['BUSINESS_EMAIL'],
    )
    return PaymentService(business)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise PaymentError('request body must be a JSON object')
    return data


def save_invoice(invoice):
    """Render the invoice to HTML under INVOICE_FOLDER and return its file name."""
    folder = current_app.config['INVOICE_FOLDER']
    os.makedirs(folder, exist_ok=True)

    filename = f"{invoice['invoiceNumber']}.html"
    html = render_template('invoice.html', invoice=invoice)
    with open(os.path.join(folder, filename), 'w', encoding='utf-8') as f:
        f.write(html)

    logger.info(f"Saved invoice {invoice['invoiceNumber']}")
    return filename


@payment_bp.route('/payment')
def payment_page():
    return render_template('payment.html')


@payment_bp.route('/api/payment/intent', methods=['POST'])
def create_intent():
    data = _json_body()
    service = get_payment_service()
    intent = service.create_payment_intent(
        data.get('amount'),
        currency=data.get('currency') or current_app.config['CURRENCY'],
        metadata=data.get('metadata') or {}
    )
    return success_response(data=intent, status=201)


@payment_bp.route('/api/payment/process', methods=['POST'])
def process_payment():
    """
    Confirm a mock intent and issue the invoice.

    Body: paymentIntentId, paymentMethodId, customer, items, travelCost.
    """
    data = _json_body()
    service = get_payment_service()

    payment = service.process_payment(data.get('paymentIntentId'), data.get('paymentMethodId'))
    invoice = service.build_invoice(
        customer=data.get('customer') or {},
        line_items=data.get('items') or [],
        travel_cost=data.get('travelCost') or 0,
        payment=payment
    )
    save_invoice(invoice)

    return success_response(data={
        'payment': payment,
        'invoice': {
            'invoiceNumber': invoice['invoiceNumber'],
            'totals': invoice['totals'],
            'downloadUrl': f"/api/invoice/{invoice['invoiceNumber']}",
        }
    })


@payment_bp.route('/api/invoice/<invoice_number>')
def download_invoice(invoice_number):
    if not INVOICE_NUMBER_PATTERN.match(invoice_number):
        abort(404)
    return send_from_directory(
        current_app.config['INVOICE_FOLDER'],
        f"{invoice_number}.html",
        as_attachment=False
    )
