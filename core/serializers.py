from rest_framework import serializers

from .models import Company, CompanyBank
from .workflow import WorkflowError, ensure_items_editable


class CompanyBankSerializer(serializers.ModelSerializer):
    class Meta:
        model = CompanyBank
        fields = [
            "id",
            "company",
            "bank_name",
            "account_name",
            "account_number",
            "swift_code",
            "ifsc_code",
            "ad_code",
            "branch_name",
            "is_default",
        ]


class CompanySerializer(serializers.ModelSerializer):
    banks = CompanyBankSerializer(many=True, read_only=True)

    class Meta:
        model = Company
        fields = [
            "id",
            "legal_name",
            "trade_name",
            "address",
            "city",
            "state",
            "country",
            "pincode",
            "email",
            "phone",
            "website",
            "gstin",
            "iec",
            "logo",
            "banks",
            "created_at",
            "updated_at",
        ]


class DocumentItemSerializerMixin:
    """Refuse line-item writes while the parent document's items are locked."""

    parent_field = ""

    def validate(self, attrs):
        parents = [attrs.get(self.parent_field), getattr(self.instance, self.parent_field, None)]
        for parent in dict.fromkeys(p for p in parents if p is not None):
            try:
                ensure_items_editable(parent)
            except WorkflowError as exc:
                raise serializers.ValidationError(str(exc))
        return super().validate(attrs)


class PaymentSerializerMixin(serializers.Serializer):
    amount_in_order_currency = serializers.SerializerMethodField()

    def get_amount_in_order_currency(self, obj):
        return obj.amount_in_order_currency()

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Payment amount must be greater than zero.")
        return value

    def validate_exchange_rate(self, value):
        if value <= 0:
            raise serializers.ValidationError("Exchange rate must be greater than zero.")
        return value
