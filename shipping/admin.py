from django.contrib import admin

from .models import ShippingBill, ShippingBillItem


class ShippingBillItemInline(admin.TabularInline):
	model = ShippingBillItem
	extra = 0
	readonly_fields = ("fob_value", "assessable_value", "export_duty_amount", "cess_amount")


@admin.register(ShippingBill)
class ShippingBillAdmin(admin.ModelAdmin):
	list_display = ("number", "version", "export_order", "customs_sb_number", "status", "fob_value", "total_value", "sb_date")
	list_filter = ("status", "port_code")
	search_fields = ("number", "customs_sb_number", "export_order__number", "consignee_name")
	readonly_fields = ("number", "version", "revised_from", "fob_value", "total_value", "filed_at", "cleared_at")
	inlines = [ShippingBillItemInline]
