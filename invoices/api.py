from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.api import DocumentItemViewSetMixin, TradeDocumentViewSetMixin
from core.conversions import convert_proforma_to_commercial, convert_proforma_to_order
from orders.serializers import ExportOrderSerializer

from .models import ProformaInvoice, ProformaItem
from .pdf import build_proforma_pdf_bytes
from .serializers import ProformaInvoiceSerializer, ProformaItemSerializer


class ProformaInvoiceViewSet(TradeDocumentViewSetMixin, viewsets.ModelViewSet):
    queryset = ProformaInvoice.objects.select_related("buyer", "quote", "bank").prefetch_related("items").all()
    serializer_class = ProformaInvoiceSerializer

    def build_pdf(self, obj):
        return build_proforma_pdf_bytes(obj)

    @action(detail=True, methods=["post"])
    def convert(self, request, pk=None):
        order = convert_proforma_to_order(proforma=self.get_object(), actor=request.user)
        return Response(
            ExportOrderSerializer(order, context=self.get_serializer_context()).data,
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["post"], url_path="convert-commercial")
    def convert_commercial(self, request, pk=None):
        proforma = convert_proforma_to_commercial(proforma=self.get_object(), actor=request.user)
        return self._respond(proforma)


class ProformaItemViewSet(DocumentItemViewSetMixin, viewsets.ModelViewSet):
    queryset = ProformaItem.objects.select_related("proforma", "sku").all()
    serializer_class = ProformaItemSerializer
