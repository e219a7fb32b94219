# Overview: Bootstrap and sample catalog data for new installations.

from __future__ import annotations

from decimal import Decimal

from ..extensions import db
from ..models import Brand, Category, Customer, Product, User
from . import permission_service
from .auth_service import assign_role, create_default_roles, hash_password

SAMPLE_BRANDS = ["Nike", "Adidas", "Apple", "Samsung", "Sony"]

SAMPLE_CATEGORIES = [
    ("Electronics", "Smartphones, tablets and laptops"),
    ("Clothing", "Men's and women's apparel"),
    ("Footwear", "Shoes, sneakers, sandals and boots"),
    ("Accessories", "Watches, bags, belts and jewelry"),
]

# (name, sku, price, stock, brand, category, description)
SAMPLE_PRODUCTS = [
    ("iPhone 13 Pro", "APPH-13PRO-256", "5999.00", 25, "Apple", "Electronics", "iPhone 13 Pro, 256GB storage"),
    ("Samsung Galaxy S22", "SAMG-S22-128", "4499.00", 18, "Samsung", "Electronics", "Samsung Galaxy S22, 128GB storage"),
    ("Nike Air Max", "NK-AIRMAX-42", "799.00", 30, "Nike", "Footwear", "Nike Air Max sneakers, size 42"),
    ("Adidas Originals Shirt", "AD-ORIG-M", "299.00", 45, "Adidas", "Clothing", "Adidas Originals shirt, size M"),
]

SAMPLE_CUSTOMERS = [
    {
        "name": "João Silva", "email": "joao@example.com", "phone": "(11) 99999-8888",
        "document": "123.456.789-00", "address": "Rua das Flores, 123",
        "city": "São Paulo", "state": "SP", "zip_code": "01234-567",
    },
    {
        "name": "Maria Oliveira", "email": "maria@example.com", "phone": "(11) 97777-6666",
        "document": "987.654.321-00", "address": "Av. Paulista, 1000",
        "city": "São Paulo", "state": "SP", "zip_code": "01310-100",
    },
    {
        "name": "Carlos Santos", "email": "carlos@example.com", "phone": "(21) 98888-7777",
        "document": "111.222.333-44", "address": "Rua do Comércio, 45",
        "city": "Rio de Janeiro", "state": "RJ", "zip_code": "20010-020",
    },
]


def bootstrap(admin_username: str = "admin", admin_email: str = "admin@example.com",
              admin_password: str = "admin123") -> dict:
    """
    Permission catalog, default roles with their grants, and an admin user.

    Idempotent: existing rows are left alone.
    """
    roles_created = create_default_roles()
    permissions_created = permission_service.initialize_permissions()
    grants_created = permission_service.assign_default_role_permissions()

    admin = db.session.query(User).filter_by(username=admin_username).first()
    admin_created = admin is None
    if admin_created:
        admin = User(
            username=admin_username,
            email=admin_email,
            first_name="Administrator",
            password_hash=hash_password(admin_password),
            is_active=True,
        )
        db.session.add(admin)
        db.session.commit()
    assign_role(admin.id, "admin")

    return {
        "roles": roles_created,
        "permissions": permissions_created,
        "grants": grants_created,
        "admin_created": admin_created,
    }


def seed_sample_data() -> bool:
    """Insert the sample catalog once. Returns False when brands already exist."""
    if db.session.query(Brand.id).first() is not None:
        return False

    brands = {name: Brand(name=name) for name in SAMPLE_BRANDS}
    categories = {name: Category(name=name, description=desc) for name, desc in SAMPLE_CATEGORIES}
    db.session.add_all(list(brands.values()) + list(categories.values()))

    for name, sku, price, stock, brand, category, description in SAMPLE_PRODUCTS:
        db.session.add(Product(
            name=name,
            sku=sku,
            price=Decimal(price),
            stock=stock,
            brand=brands[brand],
            category=categories[category],
            description=description,
        ))

    for data in SAMPLE_CUSTOMERS:
        db.session.add(Customer(**data))

    db.session.commit()
    return True
