from rest_framework import serializers

from .models import HSNCode, Product, SKU


class HSNCodeSerializer(serializers.ModelSerializer):
    class Meta:
        model = HSNCode
        fields = ["id", "code", "description", "chapter", "gst_rate"]
        read_only_fields = ["chapter"]


class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ["id", "name", "category", "description", "hsn_code", "is_active", "created_at", "updated_at"]


class SKUSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True, default="")

    class Meta:
        model = SKU
        fields = [
            "id",
            "product",
            "product_name",
            "sku_code",
            "name",
            "unit",
            "base_price",
            "hsn_code",
            "is_active",
            "created_at",
            "updated_at",
        ]
