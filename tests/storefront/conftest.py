import os

import pytest


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from storefront.utils.db import reset_data

    reset_data(_storefront_domain)
    ctx.pop()


# ---------------------------------------------------------------------------
# Catalogue and identity fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def category():
    from protean.utils.globals import current_domain
    from storefront.catalogue.category import Category
    from storefront.catalogue.management import CreateCategory

    category_id = current_domain.process(
        CreateCategory(name="Deportivos", slug="deportivos", description="Running and training"),
        asynchronous=False,
    )
    return current_domain.repository_for(Category).get(category_id)


@pytest.fixture()
def make_product(category):
    """Factory creating products through the CreateProduct command."""
    import json

    from protean.utils.globals import current_domain
    from storefront.catalogue.creation import CreateProduct
    from storefront.catalogue.product import Product

    def _make(name="Zapatillas Running Pro", price=10.0, stock=5, sizes=("42",), category_id=None, **extra):
        product_id = current_domain.process(
            CreateProduct(
                name=name,
                price=price,
                stock=stock,
                sizes=json.dumps(list(sizes)),
                category_id=category_id or str(category.id),
                **extra,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(Product).get(product_id)

    return _make


@pytest.fixture()
def make_user():
    """Factory registering users; the password hash is a fixed placeholder."""
    from protean.utils.globals import current_domain
    from storefront.identity.registration import RegisterUser
    from storefront.identity.user import User, UserRole

    def _make(email="ana@example.com", name="Ana", role=UserRole.USER.value, password_hash="not-a-real-hash"):
        user_id = current_domain.process(
            RegisterUser(email=email, password_hash=password_hash, name=name, role=role),
            asynchronous=False,
        )
        return current_domain.repository_for(User).get(user_id)

    return _make
