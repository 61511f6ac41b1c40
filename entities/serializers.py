from rest_framework import serializers

from .models import Entity


class EntitySerializer(serializers.ModelSerializer):
    class Meta:
        model = Entity
        fields = [
            "id",
            "entity_type",
            "name",
            "contact_person",
            "email",
            "phone",
            "country",
            "address",
            "tax_id",
            "verification_status",
            "notes",
            "created_at",
            "updated_at",
        ]
