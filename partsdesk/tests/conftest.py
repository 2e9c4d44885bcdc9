from decimal import Decimal

import pytest

from partsdesk.app_factory import create_app, create_auth_app
from partsdesk.db.init_db import init_db
from partsdesk.db.session import dispose_engine, get_session
from partsdesk.services.bill_service import BillService
from partsdesk.services.credential_service import hash_password

ACCOUNT = "Admin"
PASSWORD = "Rangwala"


@pytest.fixture(scope="session")
def password_hash():
    # low cost factor keeps the suite fast
    return hash_password(PASSWORD, rounds=4)


@pytest.fixture
def app(tmp_path, password_hash):
    app = create_app(
        "testing",
        overrides={
            "DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}",
            "AUTH_ACCOUNT": ACCOUNT,
            "AUTH_PASSWORD_HASH": password_hash,
            "SECRET_KEY": "test-secret",
            "SESSION_CACHE_DIR": str(tmp_path / "sessions"),
            "LOG_DIR": str(tmp_path / "logs"),
        },
    )
    init_db()
    yield app
    dispose_engine()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    resp = client.post("/login", json={"userId": ACCOUNT, "password": PASSWORD})
    assert resp.status_code == 200
    return client


@pytest.fixture
def auth_app(tmp_path, password_hash):
    return create_auth_app(
        overrides={
            "LOG_DIR": str(tmp_path / "logs"),
            "AUTH_ACCOUNT": ACCOUNT,
            "AUTH_PASSWORD_HASH": password_hash,
            "CORS_ORIGINS": ["http://localhost:5173"],
        }
    )


@pytest.fixture
def db(app):
    session = get_session()
    yield session
    session.close()


@pytest.fixture
def sample_bill(db):
    """Bill with items [{qty 2, price 100}, {qty 1, price 50}], total 250."""
    bill = BillService(db).create_bill(
        bill_number="B-001",
        customer_name="Ravi Motors",
        payment_mode="Cash",
        items=[
            {"gsm_number": "GSM-10", "quantity": 2, "price": Decimal("100")},
            {"gsm_number": "GSM-20", "quantity": 1, "price": Decimal("50")},
        ],
    )
    db.commit()
    return bill
