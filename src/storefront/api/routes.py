"""FastAPI routes for the public storefront: auth, catalogue, cart, checkout, orders.

Thin adapters that translate HTTP requests into domain commands and read
models. Routes hold no business logic, only schema to command to response translation.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.concurrency import run_in_threadpool
from protean.utils.globals import current_domain

from storefront.api.auth import Principal, current_principal
from storefront.api.schemas import (
    AddToCartRequest,
    CartItemResponse,
    CartLineResponse,
    CategoryResponse,
    CheckoutRequest,
    CheckoutResponse,
    LoginRequest,
    OrderResponse,
    ProductListResponse,
    ProductResponse,
    RegisterRequest,
    RegisterResponse,
    StatusResponse,
    TokenResponse,
    UpdateCartItemRequest,
    UserSummary,
)
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from storefront.cart.reader import load_cart_lines, product_snapshot
from storefront.catalogue.browsing import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, browse_products
from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.checkout.placement import PlaceOrder
from storefront.identity.registration import RegisterUser
from storefront.identity.security import create_access_token, hash_password, verify_password
from storefront.identity.user import User
from storefront.order.history import order_history

auth_router = APIRouter(prefix="/auth", tags=["auth"])
product_router = APIRouter(prefix="/products", tags=["catalogue"])
category_router = APIRouter(prefix="/categories", tags=["catalogue"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


def product_response(product, category=None) -> ProductResponse:
    return ProductResponse(**product_snapshot(product, category))


def category_response(category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        slug=category.slug,
        description=category.description,
    )


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------
@auth_router.post("/register", status_code=201, response_model=RegisterResponse)
async def register(body: RegisterRequest) -> RegisterResponse:
    """Create a customer account."""
    command = RegisterUser(
        email=body.email,
        password_hash=await run_in_threadpool(hash_password, body.password),
        name=body.name,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return RegisterResponse(user_id=user_id)


@auth_router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    # bcrypt runs in the threadpool, off the event loop
    user = current_domain.repository_for(User).find_by_email(body.email)
    if user is None or not await run_in_threadpool(verify_password, body.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    return TokenResponse(
        access_token=create_access_token(user.id, user.role),
        user=UserSummary(id=str(user.id), email=user.email, name=user.name, role=user.role),
    )


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@product_router.get("", response_model=ProductListResponse)
async def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    search: str | None = None,
    category: str | None = None,
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
) -> ProductListResponse:
    """Browse the catalogue, newest products first."""
    rows, pagination = browse_products(
        page=page,
        limit=limit,
        search=search,
        category_slug=category,
        min_price=min_price,
        max_price=max_price,
    )
    return ProductListResponse(
        products=[product_response(product, cat) for product, cat in rows],
        pagination=pagination,
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    """Product detail page."""
    product = current_domain.repository_for(Product).get(product_id)
    category = current_domain.repository_for(Category).get(product.category_id)
    return product_response(product, category)


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    """All categories, alphabetically."""
    return [category_response(c) for c in current_domain.repository_for(Category).all_by_name()]


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("", response_model=list[CartLineResponse])
async def get_cart(principal: Principal = Depends(current_principal)) -> list[CartLineResponse]:
    """The caller's cart lines, most recently added first."""
    return [CartLineResponse(**line) for line in load_cart_lines(principal.user_id)]


@cart_router.post("", status_code=201, response_model=CartItemResponse)
async def add_to_cart(
    body: AddToCartRequest,
    response: Response,
    principal: Principal = Depends(current_principal),
) -> CartItemResponse:
    """Add a product in a size; repeats increase the existing line."""
    command = AddToCart(
        user_id=principal.user_id,
        product_id=body.product_id,
        size=body.size,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    if not result["created"]:
        response.status_code = status.HTTP_200_OK
    return CartItemResponse(item_id=result["item_id"])


@cart_router.patch("", response_model=StatusResponse)
async def update_cart_item(
    body: UpdateCartItemRequest,
    principal: Principal = Depends(current_principal),
) -> StatusResponse:
    """Set the quantity of one of the caller's cart lines."""
    command = UpdateCartQuantity(
        user_id=principal.user_id,
        item_id=body.item_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("", response_model=StatusResponse)
async def remove_cart_item(
    item_id: str = Query(...),
    principal: Principal = Depends(current_principal),
) -> StatusResponse:
    """Remove one of the caller's cart lines."""
    command = RemoveFromCart(user_id=principal.user_id, item_id=item_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Checkout & orders
# ---------------------------------------------------------------------------
@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
async def checkout(
    body: CheckoutRequest,
    principal: Principal = Depends(current_principal),
) -> CheckoutResponse:
    """Turn the caller's cart into an order."""
    address = body.shipping_address
    command = PlaceOrder(
        user_id=principal.user_id,
        street=address.street,
        city=address.city,
        state=address.state,
        zip_code=address.zip_code,
        country=address.country,
        payment_method=body.payment_method,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return CheckoutResponse(order_id=order_id)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(principal: Principal = Depends(current_principal)) -> list[OrderResponse]:
    """Admins see every order; everyone else sees their own."""
    user_id = None if principal.is_admin else principal.user_id
    return [OrderResponse(**view) for view in order_history(user_id=user_id)]
