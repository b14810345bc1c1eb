"""Pydantic request/response schemas for the storefront API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------
class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "lucia@example.com",
                    "password": "secreto1",
                    "name": "Lucía Fernández",
                }
            ]
        }
    }

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=1, max_length=100)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserSummary(BaseModel):
    id: str
    email: str
    name: str
    role: str | None = None


class RegisterResponse(BaseModel):
    user_id: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserSummary


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str = ""
    price: float
    images: list[str] = []
    stock: int
    sizes: list[str] = []
    category_id: str
    category: CategoryResponse | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    pagination: Pagination


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Zapatilla Runner Pro",
                    "description": "Lightweight running shoe with a breathable mesh upper.",
                    "price": 89.99,
                    "images": ["https://cdn.example.com/runner-pro-1.jpg"],
                    "stock": 25,
                    "sizes": ["39", "40", "41", "42", "43"],
                    "category_id": "cat-deportivos",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(..., gt=0)
    images: list[str] = []
    stock: int = Field(0, ge=0)
    sizes: list[str] = []
    category_id: str


class UpdateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "price": 79.99,
                    "stock": 40,
                }
            ]
        }
    }

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(None, gt=0)
    images: list[str] | None = None
    stock: int | None = Field(None, ge=0)
    sizes: list[str] | None = None
    category_id: str | None = None


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Botas",
                    "slug": "botas",
                    "description": "Botas para todas las estaciones",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-runner-pro",
                    "size": "42",
                    "quantity": 1,
                }
            ]
        }
    }

    product_id: str
    size: str = Field(..., min_length=1, max_length=20)
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    item_id: str
    quantity: int = Field(..., gt=0)


class CartLineResponse(BaseModel):
    id: str
    product_id: str
    size: str
    quantity: int
    added_at: datetime | None = None
    product: ProductResponse


class CartItemResponse(BaseModel):
    item_id: str


# ---------------------------------------------------------------------------
# Checkout & orders
# ---------------------------------------------------------------------------
class ShippingAddressSchema(BaseModel):
    # Street, city and zip_code are required by the PlaceOrder command, so a
    # missing field is reported like any other checkout validation failure
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "street": "Calle Mayor 1",
                        "city": "Madrid",
                        "state": "Madrid",
                        "zip_code": "28013",
                        "country": "Spain",
                    },
                    "payment_method": "card",
                }
            ]
        }
    }

    shipping_address: ShippingAddressSchema = ShippingAddressSchema()
    payment_method: str | None = Field(None, max_length=50)


class CheckoutResponse(BaseModel):
    order_id: str
    message: str = "Order created successfully"


class AddressResponse(BaseModel):
    id: str
    street: str
    city: str
    state: str | None = None
    zip_code: str
    country: str


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    size: str | None = None


class OrderResponse(BaseModel):
    id: str
    user_id: str
    status: str
    total: float
    payment_method: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    items: list[OrderItemResponse]
    shipping_address: AddressResponse | None = None
    user: UserSummary | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., min_length=1, max_length=20)


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
class RecentOrderUser(BaseModel):
    name: str
    email: str


class RecentOrder(BaseModel):
    id: str
    total: float
    status: str
    created_at: datetime | None = None
    user: RecentOrderUser | None = None


class TopSellingProduct(BaseModel):
    product_id: str
    product: ProductResponse | None = None
    total_sold: int


class DashboardStatsResponse(BaseModel):
    total_products: int
    total_orders: int
    total_revenue: float
    total_users: int
    recent_orders: list[RecentOrder]
    top_products: list[TopSellingProduct]


class MonthlySales(BaseModel):
    month: str
    sales: float


class CategorySales(BaseModel):
    category: str
    sales: float


class ProductSales(BaseModel):
    name: str
    sales: int


class SalesAnalyticsResponse(BaseModel):
    sales_by_month: list[MonthlySales]
    sales_by_category: list[CategorySales]
    top_products: list[ProductSales]


# ---------------------------------------------------------------------------
# Common
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"
