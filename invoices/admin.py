from django.contrib import admin

from .models import ProformaInvoice, ProformaItem


class ProformaItemInline(admin.TabularInline):
	model = ProformaItem
	extra = 1


@admin.register(ProformaInvoice)
class ProformaInvoiceAdmin(admin.ModelAdmin):
	list_display = ("number", "version", "buyer", "status", "invoice_type", "currency", "total_amount", "pi_date")
	list_filter = ("status", "invoice_type", "currency")
	search_fields = ("number", "buyer__name", "quote__number")
	readonly_fields = ("number", "version", "revised_from", "total_amount", "converted_to_commercial_at")
	inlines = [ProformaItemInline]
