from rest_framework import serializers

from core.serializers import DocumentItemSerializerMixin, PaymentSerializerMixin

from .models import PurchaseOrder, PurchaseOrderItem, PurchaseOrderPayment


class PurchaseOrderItemSerializer(DocumentItemSerializerMixin, serializers.ModelSerializer):
    parent_field = "purchase_order"
    line_total = serializers.SerializerMethodField()

    class Meta:
        model = PurchaseOrderItem
        fields = ["id", "purchase_order", "sku", "description", "unit", "quantity", "unit_price", "tax_rate", "line_total"]

    def get_line_total(self, obj):
        return obj.line_total()


class PurchaseOrderPaymentSerializer(PaymentSerializerMixin, serializers.ModelSerializer):
    class Meta:
        model = PurchaseOrderPayment
        fields = [
            "id",
            "purchase_order",
            "payment_date",
            "amount",
            "currency",
            "exchange_rate",
            "amount_in_order_currency",
            "payment_method",
            "reference_number",
            "remarks",
            "recorded_by",
            "created_at",
        ]
        read_only_fields = ["recorded_by"]


class PurchaseOrderSerializer(serializers.ModelSerializer):
    formatted_number = serializers.CharField(read_only=True)
    vendor_name = serializers.CharField(source="vendor.name", read_only=True)
    amount_paid = serializers.SerializerMethodField()
    outstanding_balance = serializers.SerializerMethodField()
    items = PurchaseOrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = PurchaseOrder
        fields = [
            "id",
            "number",
            "formatted_number",
            "version",
            "revised_from",
            "status",
            "vendor",
            "vendor_name",
            "export_order",
            "order_date",
            "expected_delivery_date",
            "delivery_address",
            "payment_terms",
            "currency",
            "conversion_rate",
            "subtotal_amount",
            "tax_amount",
            "total_amount",
            "payment_status",
            "amount_paid",
            "outstanding_balance",
            "approved_at",
            "approved_by",
            "rejected_at",
            "rejection_reason",
            "cancelled_at",
            "cancel_reason",
            "notes",
            "created_by",
            "created_at",
            "updated_at",
            "items",
        ]
        read_only_fields = [
            "number",
            "version",
            "revised_from",
            "status",
            "subtotal_amount",
            "tax_amount",
            "total_amount",
            "payment_status",
            "approved_at",
            "approved_by",
            "rejected_at",
            "rejection_reason",
            "cancelled_at",
            "cancel_reason",
            "created_by",
        ]

    def get_amount_paid(self, obj):
        return obj.amount_paid()

    def get_outstanding_balance(self, obj):
        return obj.outstanding_balance()
