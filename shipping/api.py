from rest_framework import viewsets
from rest_framework.decorators import action

from core.api import DocumentItemViewSetMixin, TradeDocumentViewSetMixin

from .models import ShippingBill, ShippingBillItem
from .pdf import build_shipping_bill_pdf_bytes
from .serializers import ShippingBillItemSerializer, ShippingBillSerializer


class ShippingBillViewSet(TradeDocumentViewSetMixin, viewsets.ModelViewSet):
    queryset = ShippingBill.objects.select_related("export_order__buyer", "proforma").prefetch_related("items").all()
    serializer_class = ShippingBillSerializer

    def get_queryset(self):
        qs = super().get_queryset()
        export_order = self.request.query_params.get("export_order")
        if export_order:
            qs = qs.filter(export_order_id=export_order)
        return qs

    def build_pdf(self, obj):
        return build_shipping_bill_pdf_bytes(obj)

    @action(detail=True, methods=["post"], url_path="file")
    def file(self, request, pk=None):
        return self._transition(request, "approve")

    @action(detail=True, methods=["post"])
    def clear(self, request, pk=None):
        return self._transition(request, "clear")


class ShippingBillItemViewSet(DocumentItemViewSetMixin, viewsets.ModelViewSet):
    queryset = ShippingBillItem.objects.select_related("shipping_bill", "order_item").all()
    serializer_class = ShippingBillItemSerializer
