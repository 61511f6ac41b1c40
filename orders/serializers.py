from rest_framework import serializers

from core.serializers import DocumentItemSerializerMixin, PaymentSerializerMixin

from .models import ExportOrder, OrderItem, OrderPayment


class OrderItemSerializer(DocumentItemSerializerMixin, serializers.ModelSerializer):
    parent_field = "order"
    line_total = serializers.SerializerMethodField()
    shipped_quantity = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = ["id", "order", "sku", "description", "hsn_code", "unit", "quantity", "unit_price", "line_total", "shipped_quantity"]

    def get_line_total(self, obj):
        return obj.line_total()

    def get_shipped_quantity(self, obj):
        return obj.shipped_quantity()


class OrderPaymentSerializer(PaymentSerializerMixin, serializers.ModelSerializer):
    class Meta:
        model = OrderPayment
        fields = [
            "id",
            "order",
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


class ExportOrderSerializer(serializers.ModelSerializer):
    formatted_number = serializers.CharField(read_only=True)
    buyer_name = serializers.CharField(source="buyer.name", read_only=True)
    amount_paid = serializers.SerializerMethodField()
    outstanding_balance = serializers.SerializerMethodField()
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = ExportOrder
        fields = [
            "id",
            "number",
            "formatted_number",
            "version",
            "revised_from",
            "status",
            "proforma",
            "buyer",
            "buyer_name",
            "order_date",
            "buyer_reference",
            "incoterm",
            "payment_method",
            "payment_terms",
            "port_of_loading",
            "port_of_discharge",
            "shipment_period",
            "latest_shipment_date",
            "partial_shipment_allowed",
            "transhipment_allowed",
            "currency",
            "conversion_rate",
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
