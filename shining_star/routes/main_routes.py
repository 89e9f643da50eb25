"""
Public pages: home, catalog, portfolio gallery, calculator, contact.
"""

from flask import (
    Blueprint, render_template, redirect, request, session, current_app,
    send_from_directory, url_for
)
import logging

from shining_star.utils.catalog import list_services, list_packages, list_portfolio

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__)

HOME_SERVICES = 6
HOME_PACKAGES = 3
HOME_PORTFOLIO = 6


@main_bp.route('/')
def index():
    """Home page with a preview of each catalog section"""
    return render_template(
        'index.html',
        services=list_services()[:HOME_SERVICES],
        packages=list_packages()[:HOME_PACKAGES],
        portfolio=list_portfolio()[:HOME_PORTFOLIO]
    )


@main_bp.route('/services')
def services():
    return render_template('services.html', services=list_services())


@main_bp.route('/packages')
def packages():
    services_by_id = {s['id']: s for s in list_services()}
    return render_template(
        'packages.html',
        packages=list_packages(),
        services_by_id=services_by_id
    )


@main_bp.route('/portfolio')
def portfolio():
    return render_template('portfolio.html', portfolio=list_portfolio())


@main_bp.route('/calculator')
def calculator():
    bookable = [s for s in list_services() if s.get('available')]
    return render_template('calculator.html', services=bookable)


@main_bp.route('/contact')
def contact():
    return render_template('contact.html', services=list_services())


@main_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    """Serve portfolio images stored under UPLOAD_FOLDER."""
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)


@main_bp.route('/lang/<lang>')
def set_language(lang):
    """Switch the interface language; unsupported codes fall back to the default."""
    supported = current_app.config['SUPPORTED_LANGUAGES']
    session['lang'] = lang if lang in supported else current_app.config['DEFAULT_LANGUAGE']
    logger.debug(f"Language set to {session['lang']}")
    return redirect(request.referrer or url_for('main.index'))
