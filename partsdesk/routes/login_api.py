# partsdesk/routes/login_api.py
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from partsdesk.logger import get_logger
from partsdesk.schemas.login_dto import LoginRequest

login_api_bp = Blueprint('login_api', __name__, url_prefix='')
logger = get_logger(__name__)


@login_api_bp.route('/', methods=['GET'])
def health():
    """Health check"""
    return jsonify(status='Server running')


@login_api_bp.route('/api/login', methods=['POST'])
def login():
    """Verify the single credential; issues no session or token."""
    try:
        credentials = LoginRequest.model_validate(request.get_json(force=True))
        user_id = current_app.extensions['credential_service'].authenticate(
            identifier=credentials.identifier,
            password=credentials.password,
        )
    except ValueError as e:
        # pydantic's ValidationError is a ValueError too: malformed body
        if isinstance(e, ValidationError):
            logger.warning("Malformed login body: %s", e.error_count())
            return jsonify(message='Server error. Please try again.'), 500
        return jsonify(message='Invalid credentials'), 401
    except Exception:
        logger.exception("Login error")
        return jsonify(message='Server error. Please try again.'), 500

    return jsonify(success=True, userId=user_id)
