import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from storefront.api import ROUTERS, register_error_handlers
from storefront.identity.security import create_access_token
from storefront.identity.user import UserRole


@pytest.fixture()
def app(_storefront_domain):
    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with _storefront_domain.domain_context():
            return await call_next(request)

    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def shopper(make_user):
    return make_user(email="ana@example.com", name="Ana")


@pytest.fixture()
def admin(make_user):
    return make_user(email="admin@example.com", name="Administrador", role=UserRole.ADMIN.value)


@pytest.fixture()
def shopper_headers(shopper):
    return {"Authorization": f"Bearer {create_access_token(shopper.id, shopper.role)}"}


@pytest.fixture()
def admin_headers(admin):
    return {"Authorization": f"Bearer {create_access_token(admin.id, admin.role)}"}
