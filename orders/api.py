from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.api import DocumentItemViewSetMixin, PaymentViewSetMixin, TradeDocumentViewSetMixin
from core.conversions import create_shipping_bill
from shipping.serializers import ShippingBillSerializer

from .models import ExportOrder, OrderItem, OrderPayment
from .pdf import build_order_pdf_bytes
from .serializers import ExportOrderSerializer, OrderItemSerializer, OrderPaymentSerializer


class ExportOrderViewSet(TradeDocumentViewSetMixin, viewsets.ModelViewSet):
    queryset = ExportOrder.objects.select_related("buyer", "proforma").prefetch_related("items", "payments").all()
    serializer_class = ExportOrderSerializer

    def get_queryset(self):
        qs = super().get_queryset()
        payment_status = self.request.query_params.get("payment_status")
        if payment_status:
            qs = qs.filter(payment_status=payment_status)
        return qs

    def build_pdf(self, obj):
        return build_order_pdf_bytes(obj)

    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):
        return self._transition(request, "confirm")

    @action(detail=True, methods=["post"])
    def ship(self, request, pk=None):
        return self._transition(request, "ship")

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):
        return self._transition(request, "complete")

    @action(detail=True, methods=["get"], url_path="shippable-items")
    def shippable_items(self, request, pk=None):
        rows = self.get_object().shippable_items()
        data = [
            {
                "order_item": row["item"].pk,
                "description": row["item"].description,
                "unit": row["item"].unit,
                "ordered": row["ordered"],
                "shipped": row["shipped"],
                "remaining": row["remaining"],
            }
            for row in rows
        ]
        return Response(data)

    @action(detail=True, methods=["post"], url_path="create-shipping-bill")
    def create_shipping_bill(self, request, pk=None):
        bill = create_shipping_bill(order=self.get_object(), actor=request.user)
        return Response(
            ShippingBillSerializer(bill, context=self.get_serializer_context()).data,
            status=status.HTTP_201_CREATED,
        )


class OrderItemViewSet(DocumentItemViewSetMixin, viewsets.ModelViewSet):
    queryset = OrderItem.objects.select_related("order", "sku").all()
    serializer_class = OrderItemSerializer


class OrderPaymentViewSet(PaymentViewSetMixin, viewsets.ModelViewSet):
    queryset = OrderPayment.objects.select_related("order", "recorded_by").all()
    serializer_class = OrderPaymentSerializer
