from django.contrib import admin

from .models import PurchaseOrder, PurchaseOrderItem, PurchaseOrderPayment


class PurchaseOrderItemInline(admin.TabularInline):
	model = PurchaseOrderItem
	extra = 1


class PurchaseOrderPaymentInline(admin.TabularInline):
	model = PurchaseOrderPayment
	extra = 0
	readonly_fields = ("recorded_by", "created_at")


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(admin.ModelAdmin):
	list_display = ("number", "version", "vendor", "export_order", "status", "payment_status", "currency", "total_amount", "order_date")
	list_filter = ("status", "payment_status", "currency")
	search_fields = ("number", "vendor__name", "export_order__number")
	readonly_fields = ("number", "version", "revised_from", "subtotal_amount", "tax_amount", "total_amount", "payment_status")
	inlines = [PurchaseOrderItemInline, PurchaseOrderPaymentInline]


@admin.register(PurchaseOrderPayment)
class PurchaseOrderPaymentAdmin(admin.ModelAdmin):
	list_display = ("purchase_order", "payment_date", "amount", "currency", "payment_method", "reference_number")
	list_filter = ("payment_method", "currency")
	search_fields = ("purchase_order__number", "reference_number")
