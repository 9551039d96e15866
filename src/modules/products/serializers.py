"""Product DRF serializers for API output and schema documentation.

The serializers operate at the Interface layer (API Views).  Input
validation happens in ``ProductInputDTO``; these classes render the
service's output DTOs and describe request/response bodies for
drf-spectacular.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.constants import NAME_MAX_LENGTH, NAME_MIN_LENGTH


class ProductInputSerializer(serializers.Serializer):
    """Request body for create and update (documentation only)."""

    name = serializers.CharField(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    stock_quantity = serializers.IntegerField(min_value=0)


class ProductSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    stock_quantity = serializers.IntegerField()


class ProductAlertSerializer(serializers.Serializer):
    product = ProductSerializer()
    alert = serializers.CharField(allow_null=True)


class ProductListSerializer(serializers.Serializer):
    content = ProductSerializer(many=True)
    alerts = serializers.ListField(child=serializers.CharField())


class ErrorSerializer(serializers.Serializer):
    status = serializers.CharField()
    message = serializers.CharField()
    errors = serializers.DictField(child=serializers.CharField(), required=False)
