from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Count, Sum
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response

from accounts.models import User
from accounts.permissions import role_permissions, trade_permissions

from .audit import log_event
from .bulk import BulkUploadError, read_sheet
from .models import AuditEvent, Company, CompanyBank
from .pdf import pdf_response
from .serializers import CompanyBankSerializer, CompanySerializer
from .workflow import (
    WorkflowError,
    action_for_status,
    allowed_actions,
    ensure_items_editable,
    revise as revise_document,
    transition,
)


class DomainErrorMixin:
    """Report workflow/bulk-upload/model validation failures as 400 {"error": ...}."""

    def handle_exception(self, exc):
        if isinstance(exc, (WorkflowError, BulkUploadError)):
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        if isinstance(exc, DjangoValidationError):
            return Response({"error": "; ".join(exc.messages)}, status=status.HTTP_400_BAD_REQUEST)
        return super().handle_exception(exc)


class BulkUploadMixin(DomainErrorMixin):
    """Adds `POST <list>/bulk-upload/` taking a multipart `file` (.csv/.xlsx)."""

    def import_sheet(self, sheet):
        raise NotImplementedError

    @action(detail=False, methods=["post"], url_path="bulk-upload", parser_classes=[MultiPartParser, FormParser])
    def bulk_upload(self, request):
        upload = request.FILES.get("file")
        sheet = read_sheet(upload)
        result = self.import_sheet(sheet)
        if not result.created and not result.updated:
            raise BulkUploadError("No valid rows were found in the uploaded file.")
        log_event(
            action=AuditEvent.Action.BULK_UPLOAD,
            actor=request.user,
            summary=f"{self.basename} bulk upload: {result.created} created, {result.updated} updated",
            meta={"file": getattr(upload, "name", ""), **result.as_dict()},
        )
        return Response(result.as_dict(), status=status.HTTP_201_CREATED)


class DocumentItemViewSetMixin(DomainErrorMixin):
    """Line-item CRUD; deletes are refused once the parent document's items are locked."""

    def get_permissions(self):
        return trade_permissions(self.action)

    def perform_destroy(self, instance):
        ensure_items_editable(getattr(instance, self.get_serializer_class().parent_field))
        super().perform_destroy(instance)


class PaymentViewSetMixin(DomainErrorMixin):
    """Payments against an order: `?<order field>=<id>` filter, audited on create."""

    def get_permissions(self):
        return trade_permissions(self.action)

    def get_queryset(self):
        qs = super().get_queryset()
        field = qs.model.ORDER_FIELD
        order = self.request.query_params.get(field)
        if order:
            qs = qs.filter(**{f"{field}_id": order})
        return qs

    def perform_create(self, serializer):
        payment = serializer.save(recorded_by=self.request.user)
        order = payment.parent_order
        log_event(
            action=AuditEvent.Action.PAYMENT_RECORDED,
            actor=self.request.user,
            entity=order,
            summary=f"{payment.currency} {payment.amount} recorded against {order.number}",
            meta={"payment_id": payment.pk, "payment_status": order.payment_status},
        )


class TradeDocumentViewSetMixin(DomainErrorMixin):
    """Lifecycle, PDF and stats endpoints shared by every trade-document viewset.

    Subclasses implement `build_pdf(obj) -> bytes`.
    """

    def get_permissions(self):
        return trade_permissions(self.action)

    def get_queryset(self):
        qs = super().get_queryset()
        params = self.request.query_params
        if params.get("status"):
            qs = qs.filter(status=params["status"])
        if params.get("number"):
            qs = qs.filter(number__icontains=params["number"])
        return qs

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    def build_pdf(self, obj) -> bytes:
        raise NotImplementedError

    def _respond(self, obj, *, code=status.HTTP_200_OK):
        return Response(self.get_serializer(obj).data, status=code)

    def _transition(self, request, action_name: str):
        doc = self.get_object()
        transition(doc, action_name, actor=request.user, reason=request.data.get("reason", ""))
        return self._respond(doc)

    @action(detail=True, methods=["post"])
    def submit(self, request, pk=None):
        return self._transition(request, "submit")

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        return self._transition(request, "approve")

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        return self._transition(request, "reject")

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        return self._transition(request, "cancel")

    @action(detail=True, methods=["post"], url_path="set-status")
    def set_status(self, request, pk=None):
        doc = self.get_object()
        action_name = action_for_status(doc, request.data.get("status", ""))
        if action_name in {"approve", "reject"} and not getattr(request.user, "can_approve", False):
            raise PermissionDenied("Only owners and admins can approve or reject documents.")
        transition(doc, action_name, actor=request.user, reason=request.data.get("reason", ""))
        return self._respond(doc)

    @action(detail=True, methods=["post"])
    def revise(self, request, pk=None):
        new = revise_document(self.get_object(), actor=request.user)
        return self._respond(new, code=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def actions(self, request, pk=None):
        doc = self.get_object()
        return Response({"status": doc.status, "actions": allowed_actions(doc)})

    @action(detail=True, methods=["get"])
    def pdf(self, request, pk=None):
        doc = self.get_object()
        inline = request.query_params.get("inline") in {"1", "true", "yes", "on"}
        return pdf_response(self.build_pdf(doc), doc.pdf_filename, inline=inline)

    @action(detail=True, methods=["post"], url_path="store-pdf")
    def store_pdf(self, request, pk=None):
        from documents.models import store_generated_pdf
        from documents.serializers import DocumentSerializer

        doc = self.get_object()
        stored = store_generated_pdf(source=doc, pdf_bytes=self.build_pdf(doc), actor=request.user)
        return Response(DocumentSerializer(stored, context=self.get_serializer_context()).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        qs = self.filter_queryset(self.get_queryset())
        model = qs.model
        by_status = {row["status"]: row["count"] for row in qs.values("status").annotate(count=Count("id")).order_by()}
        current = qs.exclude(status=model.REVISED_STATUS)
        total_value = current.aggregate(v=Sum("total_amount"))["v"] or Decimal("0.00")
        pipeline_value = current.exclude(status__in=model.CLOSED_STATUSES).aggregate(v=Sum("total_amount"))["v"] or Decimal("0.00")
        current_count = current.count()
        converted = by_status.get(model.CONVERTED_STATUS, 0)
        conversion_rate = round(converted * 100.0 / current_count, 1) if current_count else 0.0
        return Response(
            {
                "count": current_count,
                "by_status": by_status,
                "total_value": str(total_value.quantize(Decimal("0.01"))),
                "pipeline_value": str(pipeline_value.quantize(Decimal("0.01"))),
                "conversion_rate": conversion_rate,
            }
        )


class CompanyViewSet(viewsets.ModelViewSet):
    queryset = Company.objects.all()
    serializer_class = CompanySerializer

    def get_permissions(self):
        # Company profile and bank details are owner/admin territory.
        return role_permissions(write=User.APPROVER_ROLES)


class CompanyBankViewSet(viewsets.ModelViewSet):
    queryset = CompanyBank.objects.select_related("company").all()
    serializer_class = CompanyBankSerializer

    def get_permissions(self):
        return role_permissions(write=User.APPROVER_ROLES)
