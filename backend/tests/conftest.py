"""
Pytest fixtures for the ERP backend tests.

Provides the app on an in-memory database, a clean database per test,
seeded roles/permissions, users for each default role, and auth helpers.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from erp import create_app
from erp.extensions import db
from erp.models import Brand, Category, Customer, Product, Role, User, UserRole
from erp.services import permission_service
from erp.services.auth_service import create_default_roles, hash_password

PASSWORD = "secret123"

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    "SECRET_KEY": "test-secret",
    "JWT_SECRET_KEY": "test-jwt-secret",
    "BCRYPT_ROUNDS": 4,
    "LOG_LEVEL": "WARNING",
}


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app(TEST_CONFIG)

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    # Clear all data but keep schema
    meta = db.metadata
    for table in reversed(meta.sorted_tables):
        db.session.execute(table.delete())
    db.session.commit()

    yield db.session

    db.session.rollback()


@pytest.fixture(scope='function')
def setup_roles(db_session):
    """Setup default roles and permissions."""
    create_default_roles()
    permission_service.initialize_permissions()
    permission_service.assign_default_role_permissions()
    db_session.commit()


def make_user(username: str, role_names=(), password: str = PASSWORD, active: bool = True) -> int:
    """Insert a user with the given roles and return its id."""
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=hash_password(password),
        is_active=active,
    )
    db.session.add(user)
    db.session.flush()
    for role_name in role_names:
        role = db.session.query(Role).filter_by(name=role_name).one()
        db.session.add(UserRole(user_id=user.id, role_id=role.id))
    db.session.commit()
    return user.id


def get_auth_token(client, username: str, password: str = PASSWORD) -> str:
    """Helper to get auth token for a user."""
    response = client.post('/api/auth/login', json={
        'username': username,
        'password': password
    })
    if response.status_code == 200:
        return response.get_json().get('token')
    return None


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def admin_user(setup_roles):
    return make_user("admin", ["admin"])


@pytest.fixture
def manager_user(setup_roles):
    return make_user("manager", ["manager"])


@pytest.fixture
def sales_user(setup_roles):
    return make_user("sales", ["sales"])


@pytest.fixture
def viewer_user(setup_roles):
    return make_user("viewer", ["viewer"])


@pytest.fixture
def admin_headers(client, admin_user):
    return auth_headers(get_auth_token(client, "admin"))


@pytest.fixture
def manager_headers(client, manager_user):
    return auth_headers(get_auth_token(client, "manager"))


@pytest.fixture
def sales_headers(client, sales_user):
    return auth_headers(get_auth_token(client, "sales"))


@pytest.fixture
def viewer_headers(client, viewer_user):
    return auth_headers(get_auth_token(client, "viewer"))


@pytest.fixture
def catalog(db_session):
    """One brand, two categories, two products and a customer (ids only)."""
    brand = Brand(name="Acme")
    electronics = Category(name="Electronics")
    books = Category(name="Books")
    db_session.add_all([brand, electronics, books])
    db_session.flush()

    phone = Product(name="Phone", sku="PH-1", price=Decimal("10.00"), stock=5,
                    brand_id=brand.id, category_id=electronics.id)
    cable = Product(name="Cable", sku="CB-1", price=Decimal("5.50"), stock=50,
                    brand_id=brand.id, category_id=electronics.id)
    customer = Customer(name="Jane Buyer", email="jane@example.com", city="Lisbon")
    db_session.add_all([phone, cable, customer])
    db_session.commit()

    return SimpleNamespace(
        brand_id=brand.id,
        electronics_id=electronics.id,
        books_id=books.id,
        phone_id=phone.id,
        cable_id=cable.id,
        customer_id=customer.id,
    )


def create_order(client, headers, customer_id, items, **header):
    """POST an order and return the response."""
    order = {"customerId": customer_id, **header}
    return client.post("/api/orders", json={"order": order, "items": items}, headers=headers)
