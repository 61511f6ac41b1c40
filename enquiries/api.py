from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.api import BulkUploadMixin, DocumentItemViewSetMixin, TradeDocumentViewSetMixin
from core.conversions import convert_enquiry_to_quote
from sales.serializers import QuoteSerializer

from .bulk import import_enquiries
from .models import Enquiry, EnquiryItem
from .pdf import build_enquiry_pdf_bytes
from .serializers import EnquiryItemSerializer, EnquirySerializer


class EnquiryViewSet(TradeDocumentViewSetMixin, BulkUploadMixin, viewsets.ModelViewSet):
    queryset = Enquiry.objects.select_related("entity", "assigned_to").prefetch_related("items").all()
    serializer_class = EnquirySerializer

    def build_pdf(self, obj):
        return build_enquiry_pdf_bytes(obj)

    def import_sheet(self, sheet):
        return import_enquiries(sheet, actor=self.request.user)

    @action(detail=True, methods=["post"])
    def contact(self, request, pk=None):
        return self._transition(request, "contact")

    @action(detail=True, methods=["post"], url_path="mark-quoted")
    def mark_quoted(self, request, pk=None):
        return self._transition(request, "mark_quoted")

    @action(detail=True, methods=["post"])
    def win(self, request, pk=None):
        return self._transition(request, "win")

    @action(detail=True, methods=["post"])
    def lose(self, request, pk=None):
        return self._transition(request, "lose")

    @action(detail=True, methods=["post"])
    def convert(self, request, pk=None):
        quote = convert_enquiry_to_quote(enquiry=self.get_object(), actor=request.user)
        return Response(QuoteSerializer(quote, context=self.get_serializer_context()).data, status=status.HTTP_201_CREATED)


class EnquiryItemViewSet(DocumentItemViewSetMixin, viewsets.ModelViewSet):
    queryset = EnquiryItem.objects.select_related("enquiry", "sku").all()
    serializer_class = EnquiryItemSerializer
