from django.db.models import Q
from rest_framework import viewsets

from accounts.permissions import role_permissions
from core.api import BulkUploadMixin

from .bulk import import_hsn_codes, import_products, import_skus
from .models import HSNCode, Product, SKU
from .serializers import HSNCodeSerializer, ProductSerializer, SKUSerializer


class HSNCodeViewSet(BulkUploadMixin, viewsets.ModelViewSet):
    queryset = HSNCode.objects.all()
    serializer_class = HSNCodeSerializer

    def get_queryset(self):
        qs = super().get_queryset()
        q = self.request.query_params.get("q")
        if q:
            qs = qs.filter(Q(code__startswith=q) | Q(description__icontains=q))
        return qs

    def import_sheet(self, sheet):
        return import_hsn_codes(sheet)

    def get_permissions(self):
        return role_permissions()


class ProductViewSet(BulkUploadMixin, viewsets.ModelViewSet):
    queryset = Product.objects.all()
    serializer_class = ProductSerializer

    def import_sheet(self, sheet):
        return import_products(sheet)

    def get_permissions(self):
        return role_permissions()


class SKUViewSet(BulkUploadMixin, viewsets.ModelViewSet):
    queryset = SKU.objects.select_related("product").all()
    serializer_class = SKUSerializer

    def import_sheet(self, sheet):
        return import_skus(sheet)

    def get_permissions(self):
        return role_permissions()
