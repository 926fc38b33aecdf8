"""HTTP façade: one RPC-style endpoint per named operation.

Queries are ``GET /rpc/<operation>`` with query parameters, mutations
are ``POST /rpc/<operation>`` with a JSON body.  Reads that find nothing
answer ``200`` with ``null``; targeted mutations on a missing ID answer
``404``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any

import structlog
from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
)

from pos.application.add_product import AddProductHandler
from pos.application.create_order import CreateOrderHandler
from pos.application.dto import OrderItemSpec
from pos.application.list_orders import ListOrdersHandler
from pos.application.list_products import ListProductsHandler
from pos.application.lookup_product import (
    GetProductByIdHandler,
    GetProductByScanCodeHandler,
)
from pos.application.show_order import ShowOrderHandler
from pos.application.update_order_status import UpdateOrderStatusHandler
from pos.application.update_product import UpdateProductHandler
from pos.domain.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ValidationError,
)
from pos.domain.model.order import OrderStatus, PaymentMethod
from pos.domain.model.product import ProductPatch
from pos.domain.model.value_objects import MAX_QUANTITY, Money
from pos.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)

# Money leaves the service as a JSON number; inside it is always Decimal.
JsonMoney = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]
PriceIn = Annotated[Decimal, Field(ge=0, max_digits=12, decimal_places=2)]

# ---- HTTP DTOs (adapter layer) ---------------------------------------------


class CreateProductRequest(BaseModel):
    scan_code: str = Field(
        min_length=1,
        validation_alias=AliasChoices("scan_code", "qr_code"),
        examples=["TEST001"],
    )
    name: str = Field(min_length=1, examples=["Test Product 1"])
    price: PriceIn = Field(examples=["19.99"])


class UpdateProductRequest(BaseModel):
    """Sparse update: omitted fields stay unchanged, ``null`` is rejected."""

    id: int
    scan_code: str | None = Field(
        None, min_length=1, validation_alias=AliasChoices("scan_code", "qr_code")
    )
    name: str | None = Field(None, min_length=1)
    price: PriceIn | None = None

    def to_patch(self) -> ProductPatch:
        given = self.model_fields_set
        kwargs: dict[str, Any] = {}
        if "scan_code" in given:
            kwargs["scan_code"] = self.scan_code
        if "name" in given:
            kwargs["name"] = self.name
        if "price" in given:
            kwargs["price"] = None if self.price is None else Money(self.price)
        return ProductPatch(**kwargs)


class CartItemIn(BaseModel):
    product_id: int
    quantity: int = Field(gt=0, le=MAX_QUANTITY, examples=[2])


class CreateOrderRequest(BaseModel):
    items: list[CartItemIn] = Field(min_length=1)
    payment_method: PaymentMethod = Field(
        validation_alias=AliasChoices("payment_method", "payment_type"),
        examples=["cash"],
    )


class UpdateOrderStatusRequest(BaseModel):
    id: int
    status: OrderStatus


class _Out(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ProductOut(_Out):
    id: int
    scan_code: str
    name: str
    price: JsonMoney
    created_at: datetime
    updated_at: datetime


class OrderOut(_Out):
    id: int
    total_amount: JsonMoney
    payment_method: str
    status: str
    created_at: datetime
    updated_at: datetime


class ProductRefOut(_Out):
    id: int
    name: str
    scan_code: str


class OrderItemOut(_Out):
    id: int
    order_id: int
    product_id: int
    quantity: int
    unit_price: JsonMoney
    subtotal: JsonMoney
    created_at: datetime
    product: ProductRefOut


class OrderDetailOut(OrderOut):
    items: list[OrderItemOut]


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: list[dict[str, Any]] | None = None


def _status_for(exc: DomainException) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, EntityNotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    return 500


def create_app(
    uow_factory: Callable[[], UnitOfWork],
    strict_status_transitions: bool = False,
) -> FastAPI:
    app = FastAPI(title="pos-storefront")

    # --- exception handlers ----------------------------------------------------

    @app.exception_handler(DomainException)
    async def handle_domain_error(request: Request, exc: DomainException) -> JSONResponse:
        status = _status_for(exc)
        logger.warning(
            "request.failed",
            path=request.url.path,
            error=type(exc).__name__,
            message=str(exc),
            status=status,
        )
        body = ErrorResponse(type=type(exc).__name__, message=str(exc))
        return JSONResponse(status_code=status, content=body.model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("request.invalid", path=request.url.path, errors=len(exc.errors()))
        body = ErrorResponse(
            type="RequestValidationError",
            message="invalid request",
            details=[
                {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
                for e in exc.errors()
            ],
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request.crashed", path=request.url.path)
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- routes ------------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    # Products

    @app.post("/rpc/createProduct", response_model=ProductOut)
    def create_product(req: CreateProductRequest) -> Any:
        return AddProductHandler(uow_factory()).handle(
            scan_code=req.scan_code, name=req.name, price=req.price
        )

    @app.get("/rpc/getProducts", response_model=list[ProductOut])
    def get_products() -> Any:
        return ListProductsHandler(uow_factory()).handle()

    @app.get("/rpc/getProductById", response_model=ProductOut | None)
    def get_product_by_id(product_id: int = Query(alias="id")) -> Any:
        return GetProductByIdHandler(uow_factory()).handle(product_id)

    @app.get("/rpc/getProductByScanCode", response_model=ProductOut | None)
    def get_product_by_scan_code(scan_code: str = Query(min_length=1)) -> Any:
        return GetProductByScanCodeHandler(uow_factory()).handle(scan_code)

    @app.post("/rpc/updateProduct", response_model=ProductOut)
    def update_product(req: UpdateProductRequest) -> Any:
        return UpdateProductHandler(uow_factory()).handle(req.id, req.to_patch())

    # Orders

    @app.post("/rpc/createOrder", response_model=OrderOut)
    def create_order(req: CreateOrderRequest) -> Any:
        return CreateOrderHandler(uow_factory()).handle(
            payment_method=req.payment_method,
            item_specs=[
                OrderItemSpec(product_id=i.product_id, quantity=i.quantity)
                for i in req.items
            ],
        )

    @app.get("/rpc/getOrders", response_model=list[OrderOut])
    def get_orders() -> Any:
        return ListOrdersHandler(uow_factory()).handle()

    @app.get("/rpc/getOrderById", response_model=OrderDetailOut | None)
    def get_order_by_id(order_id: int = Query(alias="id")) -> Any:
        return ShowOrderHandler(uow_factory()).handle(order_id)

    @app.post("/rpc/updateOrderStatus", response_model=OrderOut)
    def update_order_status(req: UpdateOrderStatusRequest) -> Any:
        handler = UpdateOrderStatusHandler(
            uow_factory(), strict_transitions=strict_status_transitions
        )
        return handler.handle(req.id, req.status)

    return app
