from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.api import DocumentItemViewSetMixin, TradeDocumentViewSetMixin
from core.conversions import convert_quote_to_proforma, duplicate_quote
from invoices.serializers import ProformaInvoiceSerializer

from .models import Quote, QuoteItem
from .pdf import build_quote_pdf_bytes
from .serializers import QuoteItemSerializer, QuoteSerializer


class QuoteViewSet(TradeDocumentViewSetMixin, viewsets.ModelViewSet):
    queryset = Quote.objects.select_related("buyer", "enquiry").prefetch_related("items").all()
    serializer_class = QuoteSerializer

    def get_queryset(self):
        qs = super().get_queryset()
        buyer = self.request.query_params.get("buyer")
        if buyer:
            qs = qs.filter(buyer_id=buyer)
        return qs

    def build_pdf(self, obj):
        return build_quote_pdf_bytes(obj)

    @action(detail=True, methods=["post"])
    def send(self, request, pk=None):
        return self._transition(request, "send")

    @action(detail=True, methods=["post"])
    def accept(self, request, pk=None):
        return self._transition(request, "accept")

    @action(detail=True, methods=["post"])
    def decline(self, request, pk=None):
        return self._transition(request, "decline")

    @action(detail=True, methods=["post"])
    def convert(self, request, pk=None):
        proforma = convert_quote_to_proforma(quote=self.get_object(), actor=request.user)
        return Response(
            ProformaInvoiceSerializer(proforma, context=self.get_serializer_context()).data,
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["post"])
    def duplicate(self, request, pk=None):
        copy = duplicate_quote(quote=self.get_object(), actor=request.user)
        return self._respond(copy, code=status.HTTP_201_CREATED)


class QuoteItemViewSet(DocumentItemViewSetMixin, viewsets.ModelViewSet):
    queryset = QuoteItem.objects.select_related("quote", "sku").all()
    serializer_class = QuoteItemSerializer
