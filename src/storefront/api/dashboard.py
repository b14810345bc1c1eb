"""FastAPI routes for the admin dashboard.

Every route requires an ADMIN principal; other callers get 403.
"""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.auth import require_admin
from storefront.api.routes import category_response, product_response
from storefront.api.schemas import (
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    DashboardStatsResponse,
    OrderResponse,
    ProductResponse,
    SalesAnalyticsResponse,
    StatusResponse,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from storefront.catalogue.category import Category
from storefront.catalogue.creation import CreateProduct
from storefront.catalogue.details import UpdateProduct
from storefront.catalogue.management import CreateCategory
from storefront.catalogue.product import Product
from storefront.catalogue.removal import DeleteProduct
from storefront.dashboard.analytics import dashboard_stats, sales_analytics
from storefront.order.history import order_view
from storefront.order.order import Order
from storefront.order.status import UpdateOrderStatus

dashboard_router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
    dependencies=[Depends(require_admin)],
)


def _product_with_category(product_id) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    category = current_domain.repository_for(Category).get(product.category_id)
    return product_response(product, category)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@dashboard_router.get("/products", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    """Every product, newest first, with its category."""
    categories = {str(c.id): c for c in current_domain.repository_for(Category).all_by_name()}
    products = current_domain.repository_for(Product).newest_first()
    return [product_response(p, categories.get(str(p.category_id))) for p in products]


@dashboard_router.post("/products", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest) -> ProductResponse:
    """Add a product to the catalogue."""
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        images=json.dumps(body.images),
        stock=body.stock,
        sizes=json.dumps(body.sizes),
        category_id=body.category_id,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return _product_with_category(product_id)


@dashboard_router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _product_with_category(product_id)


@dashboard_router.patch("/products/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponse:
    """Change only the fields present in the body; stock is set absolutely."""
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        images=json.dumps(body.images) if body.images is not None else None,
        stock=body.stock,
        sizes=json.dumps(body.sizes) if body.sizes is not None else None,
        category_id=body.category_id,
    )
    current_domain.process(command, asynchronous=False)
    return _product_with_category(product_id)


@dashboard_router.delete("/products/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    """Remove a product from the catalogue and from every cart."""
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
@dashboard_router.post("/categories", status_code=201, response_model=CategoryResponse)
async def create_category(body: CreateCategoryRequest) -> CategoryResponse:
    command = CreateCategory(
        name=body.name,
        slug=body.slug,
        description=body.description,
    )
    category_id = current_domain.process(command, asynchronous=False)
    return category_response(current_domain.repository_for(Category).get(category_id))


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@dashboard_router.patch("/orders/{order_id}", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    """Move an order along its lifecycle, or cancel it."""
    command = UpdateOrderStatus(order_id=order_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return OrderResponse(**order_view(current_domain.repository_for(Order).get(order_id)))


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------
@dashboard_router.get("/stats", response_model=DashboardStatsResponse)
async def stats() -> DashboardStatsResponse:
    """Headline numbers, recent orders and best sellers."""
    return DashboardStatsResponse(**dashboard_stats())


@dashboard_router.get("/analytics", response_model=SalesAnalyticsResponse)
async def analytics() -> SalesAnalyticsResponse:
    """Sales by month, category and product over the last six months."""
    return SalesAnalyticsResponse(**sales_analytics())
