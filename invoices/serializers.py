from rest_framework import serializers

from core.serializers import DocumentItemSerializerMixin

from .models import ProformaInvoice, ProformaItem


class ProformaItemSerializer(DocumentItemSerializerMixin, serializers.ModelSerializer):
    parent_field = "proforma"
    line_total = serializers.SerializerMethodField()

    class Meta:
        model = ProformaItem
        fields = [
            "id",
            "proforma",
            "sku",
            "description",
            "hsn_code",
            "unit",
            "quantity",
            "unit_price",
            "net_weight",
            "gross_weight",
            "line_total",
        ]

    def get_line_total(self, obj):
        return obj.line_total()


class ProformaInvoiceSerializer(serializers.ModelSerializer):
    formatted_number = serializers.CharField(read_only=True)
    buyer_name = serializers.CharField(source="buyer.name", read_only=True)
    items = ProformaItemSerializer(many=True, read_only=True)

    class Meta:
        model = ProformaInvoice
        fields = [
            "id",
            "number",
            "formatted_number",
            "version",
            "revised_from",
            "status",
            "invoice_type",
            "converted_to_commercial_at",
            "quote",
            "buyer",
            "buyer_name",
            "pi_date",
            "valid_until",
            "incoterm",
            "incoterm_place",
            "payment_terms",
            "port_of_loading",
            "port_of_discharge",
            "final_destination",
            "bank",
            "lut_number",
            "currency",
            "conversion_rate",
            "total_amount",
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
            "invoice_type",
            "converted_to_commercial_at",
            "total_amount",
            "approved_at",
            "approved_by",
            "rejected_at",
            "rejection_reason",
            "cancelled_at",
            "cancel_reason",
            "created_by",
        ]
