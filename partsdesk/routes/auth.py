# partsdesk/routes/auth.py
from flask import Blueprint, current_app, jsonify, redirect, render_template, request, session, url_for
from pydantic import ValidationError

from partsdesk.logger import get_logger
from partsdesk.schemas.login_dto import LoginRequest

auth_bp = Blueprint('auth', __name__, url_prefix='')
logger = get_logger(__name__)


def is_authenticated() -> bool:
    return session.get('auth') is True


def require_login():
    """Route gate: redirect to the login page unless the auth flag is set."""
    if not is_authenticated():
        return redirect(url_for('auth.login'))
    return None


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Login page"""
    if request.method == 'GET':
        if is_authenticated():
            return redirect(url_for('inventory.index'))
        return render_template('auth/login.html')

    wants_json = request.is_json
    payload = request.get_json(silent=True) if wants_json else request.form.to_dict()

    try:
        credentials = LoginRequest.model_validate(payload or {})
        current_app.extensions['credential_service'].authenticate(
            identifier=credentials.identifier,
            password=credentials.password,
        )
    except (ValidationError, ValueError):
        # one message for every failure
        logger.info("Dashboard login rejected")
        if wants_json:
            return jsonify(message='Invalid credentials'), 401
        return render_template('auth/login.html', error='Invalid credentials'), 401

    session['auth'] = True

    if wants_json:
        return jsonify(success=True, userId=credentials.identifier)
    return redirect(url_for('inventory.index'))


@auth_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    """Clear the auth flag"""
    session.clear()
    logger.info("Dashboard logout")
    return redirect(url_for('auth.login'))
