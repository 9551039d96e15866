"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Request bodies are validated into ``ProductInputDTO``; domain exceptions
are translated into HTTP status codes in ``handle_exception``.  Errors
raised by DRF itself (malformed JSON, unsupported media type, method not
allowed) keep DRF's status code and headers but are rendered in the same
``{status, message[, errors]}`` body.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Optional

import structlog
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import APIException
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.products.dtos import ProductInputDTO, validation_errors
from modules.products.exceptions import (
    DuplicateResource,
    EmptyCollection,
    NotFound,
    ProductDomainError,
    ValidationFailure,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    ErrorSerializer,
    ProductAlertSerializer,
    ProductInputSerializer,
    ProductListSerializer,
    ProductSerializer,
)
from modules.products.services import ProductService

_STATUS_BY_ERROR = {
    ValidationFailure: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    DuplicateResource: status.HTTP_409_CONFLICT,
    EmptyCollection: status.HTTP_204_NO_CONTENT,
}

_PRODUCT_ID = OpenApiParameter(
    "id",
    int,
    OpenApiParameter.PATH,
    description="ID of the product",
)


def error_body(
    code: int, message: str, errors: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """Build the standard error body ``{status, message[, errors]}``."""
    body: Dict[str, Any] = {"status": HTTPStatus(code).name, "message": message}
    if errors:
        body["errors"] = errors
    return body


def error_response(
    code: int, message: str, errors: Optional[Dict[str, str]] = None
) -> Response:
    return Response(error_body(code, message, errors), status=code)


def _first_message(detail: Any) -> str:
    if isinstance(detail, list) and detail:
        return _first_message(detail[0])
    return str(detail)


def drf_error_body(code: int, detail: Any) -> Dict[str, Any]:
    """Reshape the ``detail`` DRF rendered for one of its own exceptions."""
    if isinstance(detail, dict) and set(detail) == {"detail"}:
        return error_body(code, str(detail["detail"]))
    if isinstance(detail, dict):
        errors = {str(field): _first_message(msgs) for field, msgs in detail.items()}
        return error_body(code, ValidationFailure.message, errors)
    return error_body(code, _first_message(detail))


def parse_product_input(data: Any) -> ProductInputDTO:
    """Validate a request body into a ``ProductInputDTO``.

    Raises:
        ValidationFailure: with per-field messages.
    """
    if hasattr(data, "dict"):
        data = data.dict()
    try:
        return ProductInputDTO.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationFailure(validation_errors(exc)) from exc


class ProductViewSet(ViewSet):
    """ViewSet for Product operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    PATCH is not routed: updates replace the whole record.
    """

    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(
            repository=ProductDjangoRepository(),
            logger=structlog.get_logger("modules.products.services"),
        )

    def handle_exception(self, exc: Exception) -> Response:
        if not isinstance(exc, ProductDomainError):
            response = super().handle_exception(exc)
            if isinstance(exc, APIException):
                response.data = drf_error_body(response.status_code, response.data)
            return response

        code = _STATUS_BY_ERROR[type(exc)]
        if code == status.HTTP_204_NO_CONTENT:
            return Response(status=code)
        return error_response(code, str(exc), getattr(exc, "errors", None))

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(
        summary="Get all products",
        description="Returns every product in the inventory plus low-stock alerts.",
        responses={
            200: ProductListSerializer,
            204: OpenApiResponse(description="No products available"),
        },
    )
    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        listing = self._service.list_products()
        return Response(ProductListSerializer(listing).data)

    @extend_schema(
        summary="Get a product by ID",
        parameters=[_PRODUCT_ID],
        responses={200: ProductSerializer, 404: ErrorSerializer},
    )
    def retrieve(self, request: Request, pk: str) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = self._service.get_product(int(pk))
        return Response(ProductSerializer(product).data)

    @extend_schema(
        summary="Get low stock products",
        description="Returns the products with fewer than 5 units in stock.",
        responses={200: ProductSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], url_path="low-stock")
    def low_stock(self, request: Request) -> Response:
        """GET /api/v1/products/low-stock/"""
        products = self._service.list_low_stock()
        return Response(ProductSerializer(products, many=True).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(
        summary="Create a new product",
        description=(
            "Creates a product with name, price and stock quantity. "
            "Name must be unique."
        ),
        request=ProductInputSerializer,
        responses={
            201: ProductAlertSerializer,
            400: ErrorSerializer,
            409: ErrorSerializer,
        },
    )
    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        dto = parse_product_input(request.data)
        result = self._service.create_product(dto)
        return Response(
            ProductAlertSerializer(result).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(
        summary="Update an existing product",
        description="Replaces name, price and stock quantity of the product.",
        parameters=[_PRODUCT_ID],
        request=ProductInputSerializer,
        responses={
            200: ProductAlertSerializer,
            400: ErrorSerializer,
            404: ErrorSerializer,
            409: ErrorSerializer,
        },
    )
    def update(self, request: Request, pk: str) -> Response:
        """PUT /api/v1/products/{pk}/"""
        dto = parse_product_input(request.data)
        result = self._service.update_product(int(pk), dto)
        return Response(ProductAlertSerializer(result).data)

    @extend_schema(
        summary="Delete a product",
        description="Deletes a product by its ID and returns the deleted record.",
        parameters=[_PRODUCT_ID],
        responses={200: ProductSerializer, 404: ErrorSerializer},
    )
    def destroy(self, request: Request, pk: str) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        product = self._service.delete_product(int(pk))
        return Response(ProductSerializer(product).data)
