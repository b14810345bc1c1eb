"""Demo data for a fresh storefront: two accounts, four categories, six products.

Seeding is idempotent: accounts are matched by email, categories by slug and
products by name, so running it twice creates nothing new.
"""

import json

import structlog
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.creation import CreateProduct
from storefront.catalogue.management import CreateCategory
from storefront.catalogue.product import Product
from storefront.identity.registration import RegisterUser
from storefront.identity.security import hash_password
from storefront.identity.user import User, UserRole

logger = structlog.get_logger(__name__)

USERS = [
    {"email": "admin@example.com", "password": "admin123", "name": "Administrador", "role": UserRole.ADMIN.value},
    {"email": "user@example.com", "password": "user123", "name": "Usuario de Prueba", "role": UserRole.USER.value},
]

CATEGORIES = [
    {
        "name": "Deportivos",
        "slug": "deportivos",
        "description": "Zapatos deportivos para running, entrenamiento y actividades físicas",
    },
    {"name": "Casuales", "slug": "casuales", "description": "Zapatos casuales para el día a día"},
    {"name": "Formales", "slug": "formales", "description": "Zapatos formales para ocasiones especiales"},
    {"name": "Botas", "slug": "botas", "description": "Botas para todas las estaciones"},
]

PRODUCTS = [
    {
        "name": "Zapatillas Running Pro",
        "description": "Zapatillas de running de alta calidad con tecnología de amortiguación avanzada.",
        "price": 89.99,
        "images": ["/products/running-1.jpg", "/products/running-2.jpg"],
        "stock": 50,
        "sizes": ["38", "39", "40", "41", "42", "43", "44"],
        "category": "deportivos",
    },
    {
        "name": "Zapatillas Casual Urban",
        "description": "Zapatillas casuales con diseño moderno y cómodas para el uso diario.",
        "price": 59.99,
        "images": ["/products/casual-1.jpg", "/products/casual-2.jpg"],
        "stock": 75,
        "sizes": ["36", "37", "38", "39", "40", "41", "42", "43"],
        "category": "casuales",
    },
    {
        "name": "Zapatos Oxford Clásicos",
        "description": "Zapatos formales de cuero genuino con estilo clásico.",
        "price": 129.99,
        "images": ["/products/formal-1.jpg", "/products/formal-2.jpg"],
        "stock": 30,
        "sizes": ["39", "40", "41", "42", "43", "44", "45"],
        "category": "formales",
    },
    {
        "name": "Botas de Cuero Marrón",
        "description": "Botas elegantes de cuero marrón con suela antideslizante.",
        "price": 149.99,
        "images": ["/products/botas-1.jpg", "/products/botas-2.jpg"],
        "stock": 25,
        "sizes": ["39", "40", "41", "42", "43", "44"],
        "category": "botas",
    },
    {
        "name": "Zapatillas Deportivas Air",
        "description": "Zapatillas deportivas con tecnología de aire para máxima comodidad.",
        "price": 99.99,
        "images": ["/products/sport-1.jpg", "/products/sport-2.jpg"],
        "stock": 60,
        "sizes": ["38", "39", "40", "41", "42", "43", "44", "45"],
        "category": "deportivos",
    },
    {
        "name": "Zapatos Derby Negros",
        "description": "Zapatos Derby de cuero negro con acabado brillante.",
        "price": 119.99,
        "images": ["/products/derby-1.jpg", "/products/derby-2.jpg"],
        "stock": 40,
        "sizes": ["39", "40", "41", "42", "43", "44"],
        "category": "formales",
    },
]


def seed_demo_data():
    """Create the demo accounts and catalogue. Must run inside a domain context."""
    user_repo = current_domain.repository_for(User)
    created = {"users": 0, "categories": 0, "products": 0}

    for user in USERS:
        if user_repo.find_by_email(user["email"]) is None:
            current_domain.process(
                RegisterUser(
                    email=user["email"],
                    password_hash=hash_password(user["password"]),
                    name=user["name"],
                    role=user["role"],
                ),
                asynchronous=False,
            )
            created["users"] += 1

    category_repo = current_domain.repository_for(Category)
    category_ids = {}
    for category in CATEGORIES:
        existing = category_repo.find_by_slug(category["slug"])
        if existing is None:
            category_ids[category["slug"]] = current_domain.process(CreateCategory(**category), asynchronous=False)
            created["categories"] += 1
        else:
            category_ids[category["slug"]] = str(existing.id)

    existing_names = {p.name for p in current_domain.repository_for(Product).newest_first()}
    for product in PRODUCTS:
        if product["name"] in existing_names:
            continue
        current_domain.process(
            CreateProduct(
                name=product["name"],
                description=product["description"],
                price=product["price"],
                images=json.dumps(product["images"]),
                stock=product["stock"],
                sizes=json.dumps(product["sizes"]),
                category_id=category_ids[product["category"]],
            ),
            asynchronous=False,
        )
        created["products"] += 1

    logger.info("Seeded demo data", **created)
    return created
