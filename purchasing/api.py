from rest_framework import viewsets
from rest_framework.decorators import action

from core.api import DocumentItemViewSetMixin, PaymentViewSetMixin, TradeDocumentViewSetMixin

from .models import PurchaseOrder, PurchaseOrderItem, PurchaseOrderPayment
from .pdf import build_purchase_order_pdf_bytes
from .serializers import PurchaseOrderItemSerializer, PurchaseOrderPaymentSerializer, PurchaseOrderSerializer


class PurchaseOrderViewSet(TradeDocumentViewSetMixin, viewsets.ModelViewSet):
    queryset = PurchaseOrder.objects.select_related("vendor", "export_order").prefetch_related("items", "payments").all()
    serializer_class = PurchaseOrderSerializer

    def get_queryset(self):
        qs = super().get_queryset()
        export_order = self.request.query_params.get("export_order")
        if export_order:
            qs = qs.filter(export_order_id=export_order)
        payment_status = self.request.query_params.get("payment_status")
        if payment_status:
            qs = qs.filter(payment_status=payment_status)
        return qs

    def build_pdf(self, obj):
        return build_purchase_order_pdf_bytes(obj)

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):
        return self._transition(request, "complete")


class PurchaseOrderItemViewSet(DocumentItemViewSetMixin, viewsets.ModelViewSet):
    queryset = PurchaseOrderItem.objects.select_related("purchase_order", "sku").all()
    serializer_class = PurchaseOrderItemSerializer


class PurchaseOrderPaymentViewSet(PaymentViewSetMixin, viewsets.ModelViewSet):
    queryset = PurchaseOrderPayment.objects.select_related("purchase_order", "recorded_by").all()
    serializer_class = PurchaseOrderPaymentSerializer
