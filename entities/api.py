from rest_framework import viewsets

from accounts.permissions import role_permissions
from core.api import BulkUploadMixin

from .bulk import import_entities
from .models import Entity
from .serializers import EntitySerializer


class EntityViewSet(BulkUploadMixin, viewsets.ModelViewSet):
    queryset = Entity.objects.all()
    serializer_class = EntitySerializer

    def get_queryset(self):
        qs = super().get_queryset()
        entity_type = self.request.query_params.get("type")
        if entity_type:
            qs = qs.filter(entity_type=entity_type)
        return qs

    def import_sheet(self, sheet):
        return import_entities(sheet)

    def get_permissions(self):
        return role_permissions()
