from rest_framework import serializers

from core.serializers import DocumentItemSerializerMixin

from .models import Enquiry, EnquiryItem


class EnquiryItemSerializer(DocumentItemSerializerMixin, serializers.ModelSerializer):
    parent_field = "enquiry"
    line_total = serializers.SerializerMethodField()

    class Meta:
        model = EnquiryItem
        fields = ["id", "enquiry", "sku", "product_name", "description", "quantity", "unit", "target_price", "notes", "line_total"]

    def get_line_total(self, obj):
        return obj.line_total()


class EnquirySerializer(serializers.ModelSerializer):
    formatted_number = serializers.CharField(read_only=True)
    items = EnquiryItemSerializer(many=True, read_only=True)

    class Meta:
        model = Enquiry
        fields = [
            "id",
            "number",
            "formatted_number",
            "version",
            "revised_from",
            "status",
            "entity",
            "customer_name",
            "customer_email",
            "customer_phone",
            "customer_company",
            "customer_country",
            "source",
            "subject",
            "description",
            "priority",
            "assigned_to",
            "follow_up_date",
            "currency",
            "total_amount",
            "notes",
            "created_by",
            "created_at",
            "updated_at",
            "items",
        ]
        read_only_fields = ["number", "version", "revised_from", "status", "total_amount", "created_by"]
