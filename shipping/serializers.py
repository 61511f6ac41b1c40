from rest_framework import serializers

from core.serializers import DocumentItemSerializerMixin

from .models import ShippingBill, ShippingBillItem


class ShippingBillItemSerializer(DocumentItemSerializerMixin, serializers.ModelSerializer):
    parent_field = "shipping_bill"

    class Meta:
        model = ShippingBillItem
        fields = [
            "id",
            "shipping_bill",
            "order_item",
            "hsn_code",
            "description",
            "quantity",
            "unit",
            "unit_price",
            "fob_value",
            "freight_allocation",
            "insurance_allocation",
            "assessable_value",
            "export_duty_rate",
            "export_duty_amount",
            "cess_rate",
            "cess_amount",
        ]
        read_only_fields = ["fob_value", "assessable_value", "export_duty_amount", "cess_amount"]

    def validate(self, attrs):
        attrs = super().validate(attrs)
        bill = attrs.get("shipping_bill") or getattr(self.instance, "shipping_bill", None)
        order_item = attrs.get("order_item")
        if bill is not None and order_item is not None and order_item.order_id != bill.export_order_id:
            raise serializers.ValidationError({"order_item": "Item does not belong to this shipping bill's export order."})

        order_item = attrs.get("order_item", getattr(self.instance, "order_item", None))
        quantity = attrs.get("quantity", getattr(self.instance, "quantity", ShippingBillItem._meta.get_field("quantity").default))
        if order_item is not None:
            left = order_item.quantity - order_item.shipped_quantity(exclude=self.instance)
            if quantity > left:
                raise serializers.ValidationError(
                    {"quantity": f"Only {left} {order_item.unit} of {order_item.description} are left to ship."}
                )
        return attrs

    def validate_quantity(self, value):
        if value <= 0:
            raise serializers.ValidationError("Quantity must be greater than zero.")
        return value


class ShippingBillSerializer(serializers.ModelSerializer):
    formatted_number = serializers.CharField(read_only=True)
    total_duty = serializers.SerializerMethodField()
    items = ShippingBillItemSerializer(many=True, read_only=True)

    class Meta:
        model = ShippingBill
        fields = [
            "id",
            "number",
            "formatted_number",
            "version",
            "revised_from",
            "status",
            "export_order",
            "proforma",
            "customs_sb_number",
            "sb_date",
            "port_code",
            "customs_house",
            "customs_officer_name",
            "vessel_name",
            "voyage_number",
            "port_of_loading",
            "port_of_discharge",
            "number_of_packages",
            "gross_weight",
            "net_weight",
            "ad_code",
            "consignee_name",
            "consignee_address",
            "consignee_country",
            "currency",
            "conversion_rate",
            "fob_value",
            "freight_value",
            "insurance_value",
            "total_value",
            "total_duty",
            "let_export_order_number",
            "let_export_date",
            "filed_at",
            "cleared_at",
            "approved_by",
            "rejected_at",
            "rejection_reason",
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
            "fob_value",
            "total_value",
            "filed_at",
            "cleared_at",
            "approved_by",
            "rejected_at",
            "rejection_reason",
            "created_by",
        ]

    def get_total_duty(self, obj):
        return obj.total_duty()
