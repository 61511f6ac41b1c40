from rest_framework import viewsets
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser

from accounts.permissions import trade_permissions
from core.audit import log_event
from core.models import AuditEvent

from .models import RELATED_FIELDS, Document
from .serializers import DocumentSerializer


class DocumentViewSet(viewsets.ModelViewSet):
    queryset = Document.objects.select_related("uploaded_by").all()
    serializer_class = DocumentSerializer
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get_permissions(self):
        return trade_permissions(self.action)

    def get_queryset(self):
        qs = super().get_queryset()
        params = self.request.query_params
        if params.get("doc_type"):
            qs = qs.filter(doc_type=params["doc_type"])
        for field in RELATED_FIELDS:
            if params.get(field):
                qs = qs.filter(**{f"{field}_id": params[field]})
        return qs

    def perform_create(self, serializer):
        document = serializer.save(uploaded_by=self.request.user)
        log_event(
            action=AuditEvent.Action.DOCUMENT_UPLOADED,
            actor=self.request.user,
            entity=document,
            summary=f"{document.doc_type_label}: {document.title} v{document.version}",
            meta={"file": document.file.name},
        )
