from rest_framework import serializers

from .models import RELATED_FIELDS, Document


class DocumentSerializer(serializers.ModelSerializer):
    doc_type_label = serializers.CharField(read_only=True)

    class Meta:
        model = Document
        fields = [
            "id",
            "doc_type",
            "doc_type_other",
            "doc_type_label",
            "title",
            "version",
            "file",
            "is_generated",
            "notes",
            "expiry_date",
            *RELATED_FIELDS,
            "uploaded_by",
            "uploaded_at",
            "created_at",
        ]
        read_only_fields = ["version", "is_generated", "uploaded_by", "uploaded_at", "created_at"]

    def validate(self, attrs):
        doc_type = attrs.get("doc_type", getattr(self.instance, "doc_type", None))
        other = attrs.get("doc_type_other", getattr(self.instance, "doc_type_other", ""))
        if doc_type == Document.DocumentType.OTHER and not (other or "").strip():
            raise serializers.ValidationError({"doc_type_other": "Please specify the document type."})
        return attrs
