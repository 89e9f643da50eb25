"""
Admin panel: login, dashboard and JSON CRUD for the catalog.

Every write goes through CatalogService, which validates before persisting;
validation failures come back as a 400 listing every message.
"""

from flask import (
    Blueprint, request, render_template, redirect, url_for, session, flash
)
from werkzeug.security import check_password_hash
import json
import logging

from shining_star.cache import clear_catalog_cache
from shining_star.decorators import require_admin, rate_limit
from shining_star.exceptions import ValidationFailed
from shining_star.repositories import (
    ServiceRepository, PackageRepository, PortfolioRepository, UserRepository
)
from shining_star.services.catalog_service import CatalogService
from shining_star.utils.response_helpers import success_response, error_response
from shining_star.utils.uploads import save_image, remove_image

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')

catalog = CatalogService()


def _json_payload():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationFailed(['request body must be a JSON object'])
    return data


def _localized_form_field(name):
    """Form fields carry localized maps as JSON strings, or plain English text."""
    raw = request.form.get(name, '')
    try:
        value = json.loads(raw)
    except ValueError:
        value = raw
    return value if isinstance(value, dict) else {'en': raw}


@admin_bp.route('/login', methods=['GET', 'POST'])
@rate_limit("10 per minute")
def login():
    if request.method == 'GET':
        if session.get('user'):
            return redirect(url_for('admin.dashboard'))
        return render_template('admin/login.html', error=None)

    data = request.get_json(silent=True) if request.is_json else request.form
    data = data or {}
    username = (data.get('username') or '').strip()
    password = data.get('password') or ''

    user = UserRepository.get_by_username(username) if username else None
    if (
        user
        and user['active']
        and user['role'] == 'admin'
        and check_password_hash(user['password_hash'], password)
    ):
        session.clear()
        session['user'] = {
            'username': user['username'],
            'role': user['role'],
            'email': user['email'],
        }
        logger.info(f"Admin {username} logged in")
        if request.is_json:
            return success_response(data={'redirect': url_for('admin.dashboard')})
        return redirect(url_for('admin.dashboard'))

    logger.warning(f"Failed admin login for {username!r}")
    if request.is_json:
        return error_response('Invalid credentials', status=401, error_code='INVALID_CREDENTIALS')
    return render_template('admin/login.html', error='Invalid credentials'), 401


@admin_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    session.pop('user', None)
    flash('Logged out', 'info')
    return redirect(url_for('main.index'))


@admin_bp.route('/')
@require_admin
def dashboard():
    return render_template(
        'admin/dashboard.html',
        stats=catalog.dashboard_stats(),
        services=ServiceRepository.get_all(),
        packages=PackageRepository.get_all(),
        portfolio=PortfolioRepository.get_all()
    )


# Services

@admin_bp.route('/api/services', methods=['GET'])
@require_admin
def list_services():
    return success_response(data=ServiceRepository.get_all())


@admin_bp.route('/api/services', methods=['POST'])
@require_admin
def create_service():
    record = catalog.create_service(_json_payload())
    clear_catalog_cache()
    return success_response(data=record, message='Service created', status=201)


@admin_bp.route('/api/services/<service_id>', methods=['PUT'])
@require_admin
def update_service(service_id):
    record = catalog.update_service(service_id, _json_payload())
    clear_catalog_cache()
    return success_response(data=record, message='Service updated')


@admin_bp.route('/api/services/<service_id>', methods=['DELETE'])
@require_admin
def delete_service(service_id):
    packages_modified = catalog.delete_service(service_id)
    clear_catalog_cache()
    return success_response(
        data={'id': service_id, 'packagesModified': packages_modified},
        message='Service deleted'
    )


# Packages

@admin_bp.route('/api/packages', methods=['GET'])
@require_admin
def list_packages():
    return success_response(data=PackageRepository.get_all())


@admin_bp.route('/api/packages', methods=['POST'])
@require_admin
def create_package():
    record = catalog.create_package(_json_payload())
    clear_catalog_cache()
    return success_response(data=record, message='Package created', status=201)


@admin_bp.route('/api/packages/<package_id>', methods=['PUT'])
@require_admin
def update_package(package_id):
    record = catalog.update_package(package_id, _json_payload())
    clear_catalog_cache()
    return success_response(data=record, message='Package updated')


@admin_bp.route('/api/packages/<package_id>', methods=['DELETE'])
@require_admin
def delete_package(package_id):
    catalog.delete_package(package_id)
    clear_catalog_cache()
    return success_response(data={'id': package_id}, message='Package deleted')


# Portfolio

@admin_bp.route('/api/portfolio', methods=['POST'])
@require_admin
def create_portfolio_item():
    """
    Add a before/after gallery entry.

    Accepts JSON, or multipart form data with 'before'/'after' image files.
    """
    if request.is_json:
        payload = _json_payload()
        record = catalog.create_portfolio_item(payload)
    else:
        payload = {
            'title': _localized_form_field('title'),
            'description': _localized_form_field('description'),
            'category': request.form.get('category') or None,
            'featured': request.form.get('featured') in ('true', 'on', '1'),
        }
        before = save_image(request.files.get('before'), 'before')
        after = save_image(request.files.get('after'), 'after')
        try:
            record = catalog.create_portfolio_item(payload, before, after)
        except ValidationFailed:
            remove_image(before)
            remove_image(after)
            raise

    clear_catalog_cache()
    return success_response(data=record, message='Portfolio item created', status=201)


@admin_bp.route('/api/portfolio/<item_id>', methods=['DELETE'])
@require_admin
def delete_portfolio_item(item_id):
    item = catalog.delete_portfolio_item(item_id)
    remove_image(item.get('beforeImage'))
    remove_image(item.get('afterImage'))
    clear_catalog_cache()
    return success_response(data={'id': item_id}, message='Portfolio item deleted')
