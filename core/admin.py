from django.contrib import admin

from .models import AuditEvent, Company, CompanyBank, DocumentSequence


class CompanyBankInline(admin.TabularInline):
	model = CompanyBank
	extra = 0


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
	list_display = ("legal_name", "trade_name", "gstin", "iec", "email", "phone")
	search_fields = ("legal_name", "trade_name", "gstin", "iec")
	inlines = [CompanyBankInline]


@admin.register(DocumentSequence)
class DocumentSequenceAdmin(admin.ModelAdmin):
	list_display = ("prefix", "day", "last_number")
	list_filter = ("prefix",)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
	list_display = ("created_at", "action", "entity_type", "entity_id", "actor", "summary")
	list_filter = ("action", "entity_type")
	search_fields = ("summary", "actor__email")
	readonly_fields = ("action", "actor", "entity_type", "entity_id", "summary", "meta", "created_at")
