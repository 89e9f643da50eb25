"""
Shared fixtures: a Flask app backed by a temporary sqlite file.
"""

import pytest

from shining_star import create_app

ADMIN_PASSWORD = 'correct-horse-battery'


@pytest.fixture
def app(tmp_path):
    """Create test Flask app."""
    app = create_app('testing', {
        'DATABASE_PATH': str(tmp_path / 'test.db'),
        'UPLOAD_FOLDER': str(tmp_path / 'uploads'),
        'INVOICE_FOLDER': str(tmp_path / 'invoices'),
        'ADMIN_USERNAME': 'admin',
        'ADMIN_PASSWORD': ADMIN_PASSWORD,
        'DISTANCE_TABLE': {
            '100 Near St, Philadelphia, PA': 3,
            '200 Far Ave, Philadelphia, PA': 15,
        },
    })
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def admin_client(client):
    """Client with an admin session."""
    with client.session_transaction() as sess:
        sess['user'] = {'username': 'admin', 'role': 'admin', 'email': 'admin@example.com'}
    return client


@pytest.fixture
def service_payload():
    def _make(**overrides):
        payload = {
            'name': {'en': 'Window Washing', 'es': 'Limpieza de ventanas'},
            'description': {'en': 'Inside and out'},
            'price': 12,
            'duration': 15,
            'category': 'windows',
            'calculationType': 'quantity',
            'unit': 'window',
            'maxQuantity': 40,
        }
        payload.update(overrides)
        return payload
    return _make
