'''Flask application factories.

create_app()       dashboard service: session-gated JSON views over the parts
                   and billing tables
create_auth_app()  stateless login check, no session, CORS allow-list

Neither factory starts a server; run.py / run_auth.py do that.
'''
# partsdesk/app_factory.py
import os
from typing import Any, Mapping, Optional

from cachelib.file import FileSystemCache
from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from flask_session import Session
from pydantic import ValidationError

from partsdesk.db.session import init_engine
from partsdesk.logger import get_logger, init_file_logging
from partsdesk.services.credential_service import CredentialService

# load environment variables
load_dotenv()

logger = get_logger(__name__)

# project root (absolute)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')


def _credential_config(app: Flask) -> None:
    app.config['AUTH_ACCOUNT'] = os.getenv('AUTH_ACCOUNT', 'Admin')
    app.config['AUTH_PASSWORD_HASH'] = os.getenv('AUTH_PASSWORD_HASH')
    app.config['AUTH_PASSWORD'] = os.getenv('AUTH_PASSWORD')


def _logging_config(app: Flask) -> None:
    app.config['LOG_DIR'] = os.getenv('LOG_DIR', os.path.join(BASE_DIR, 'logs'))


def _init_credentials(app: Flask) -> None:
    # raises RuntimeError when no credential is configured
    app.extensions['credential_service'] = CredentialService.from_config(app.config)
    # the plaintext fallback is not kept around after hashing
    app.config.pop('AUTH_PASSWORD', None)


def create_app(config_name: str = 'development', overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Dashboard application factory."""
    app = Flask(__name__, template_folder=TEMPLATE_DIR)

    # base settings
    secret_key = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    if isinstance(secret_key, bytes):
        secret_key = secret_key.decode('utf-8')
    app.config['SECRET_KEY'] = secret_key
    app.config['TESTING'] = config_name == 'testing'

    # database, no default: a missing URL stops the boot
    app.config['DATABASE_URL'] = os.getenv('DATABASE_URL')

    _credential_config(app)
    _logging_config(app)

    # session: holds only the boolean "auth" flag, no expiry until logout
    app.config['SESSION_TYPE'] = 'cachelib'
    app.config['SESSION_PERMANENT'] = False
    app.config['SESSION_KEY_PREFIX'] = 'partsdesk:'
    app.config['SESSION_CACHE_DIR'] = os.getenv('SESSION_CACHE_DIR', os.path.join(BASE_DIR, 'flask_session'))

    if overrides:
        app.config.update(overrides)

    init_file_logging(app.config['LOG_DIR'])
    init_engine(app.config['DATABASE_URL'])
    _init_credentials(app)

    if 'SESSION_CACHELIB' not in app.config:
        app.config['SESSION_CACHELIB'] = FileSystemCache(app.config['SESSION_CACHE_DIR'], threshold=500)
    Session(app)

    # blueprints
    from partsdesk.routes.auth import auth_bp
    from partsdesk.routes.inventory import inventory_bp
    from partsdesk.routes.billing import billing_bp
    from partsdesk.routes.profit import profit_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(inventory_bp)
    app.register_blueprint(billing_bp)
    app.register_blueprint(profit_bp)

    register_error_handlers(app)

    logger.info("Dashboard app created (%s)", config_name)
    return app


def create_auth_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Auth service factory: one credential, no sessions, no database."""
    app = Flask(__name__)

    _credential_config(app)
    _logging_config(app)
    origins = os.getenv('CORS_ORIGINS', 'http://localhost:5173')
    app.config['CORS_ORIGINS'] = [o.strip() for o in origins.split(',') if o.strip()]

    if overrides:
        app.config.update(overrides)

    init_file_logging(app.config['LOG_DIR'])
    _init_credentials(app)

    CORS(
        app,
        origins=app.config['CORS_ORIGINS'],
        methods=['GET', 'POST', 'OPTIONS'],
        allow_headers=['Content-Type'],
    )

    from partsdesk.routes.login_api import login_api_bp
    app.register_blueprint(login_api_bp)

    register_error_handlers(app)

    logger.info("Auth app created, allowed origins: %s", app.config['CORS_ORIGINS'])
    return app


def register_error_handlers(app: Flask) -> None:
    """JSON error responses"""
    @app.errorhandler(ValidationError)
    def invalid_body(error):
        first = error.errors()[0] if error.errors() else {}
        field = '.'.join(str(p) for p in first.get('loc', ()))
        message = f"{field}: {first.get('msg')}" if field else 'Invalid request body'
        return jsonify(message=message), 400

    @app.errorhandler(404)
    def not_found(error):
        return jsonify(message='Not found'), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify(message='Method not allowed'), 405

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify(message='Server error. Please try again.'), 500
