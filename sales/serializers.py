from rest_framework import serializers

from core.serializers import DocumentItemSerializerMixin

from .models import Quote, QuoteItem


class QuoteItemSerializer(DocumentItemSerializerMixin, serializers.ModelSerializer):
    parent_field = "quote"

    class Meta:
        model = QuoteItem
        fields = [
            "id",
            "quote",
            "sku",
            "product_name",
            "description",
            "hsn_code",
            "quantity",
            "unit",
            "unit_price",
            "discount_percent",
            "tax_percent",
            "total_price",
        ]
        read_only_fields = ["total_price"]

    def validate(self, attrs):
        attrs = super().validate(attrs)
        for field in ("discount_percent", "tax_percent"):
            value = attrs.get(field)
            if value is not None and not (0 <= value <= 100):
                raise serializers.ValidationError({field: "Must be between 0 and 100."})
        return attrs


class QuoteSerializer(serializers.ModelSerializer):
    formatted_number = serializers.CharField(read_only=True)
    buyer_name = serializers.CharField(source="buyer.name", read_only=True)
    approval_required = serializers.SerializerMethodField()
    items = QuoteItemSerializer(many=True, read_only=True)

    class Meta:
        model = Quote
        fields = [
            "id",
            "number",
            "formatted_number",
            "version",
            "revised_from",
            "status",
            "enquiry",
            "buyer",
            "buyer_name",
            "quote_date",
            "valid_until",
            "incoterm",
            "payment_terms",
            "currency",
            "conversion_rate",
            "subtotal_amount",
            "discount_amount",
            "tax_amount",
            "total_amount",
            "approval_required",
            "approval_requested_at",
            "approved_at",
            "approved_by",
            "rejected_at",
            "rejection_reason",
            "sent_at",
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
            "discount_amount",
            "tax_amount",
            "total_amount",
            "approval_requested_at",
            "approved_at",
            "approved_by",
            "rejected_at",
            "rejection_reason",
            "sent_at",
            "cancelled_at",
            "cancel_reason",
            "created_by",
        ]

    def get_approval_required(self, obj):
        return obj.approval_required()

    def validate(self, attrs):
        quote_date = attrs.get("quote_date", getattr(self.instance, "quote_date", None))
        valid_until = attrs.get("valid_until", getattr(self.instance, "valid_until", None))
        if quote_date and valid_until and valid_until < quote_date:
            raise serializers.ValidationError({"valid_until": "Validity date cannot be before the quote date."})
        return attrs
