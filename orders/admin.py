from django.contrib import admin

from .models import ExportOrder, OrderItem, OrderPayment


class OrderItemInline(admin.TabularInline):
	model = OrderItem
	extra = 1


class OrderPaymentInline(admin.TabularInline):
	model = OrderPayment
	extra = 0
	readonly_fields = ("recorded_by", "created_at")


@admin.register(ExportOrder)
class ExportOrderAdmin(admin.ModelAdmin):
	list_display = ("number", "version", "buyer", "status", "payment_status", "currency", "total_amount", "order_date")
	list_filter = ("status", "payment_status", "payment_method")
	search_fields = ("number", "buyer__name", "buyer_reference")
	readonly_fields = ("number", "version", "revised_from", "total_amount", "payment_status")
	inlines = [OrderItemInline, OrderPaymentInline]


@admin.register(OrderPayment)
class OrderPaymentAdmin(admin.ModelAdmin):
	list_display = ("order", "payment_date", "amount", "currency", "payment_method", "reference_number")
	list_filter = ("payment_method", "currency")
	search_fields = ("order__number", "reference_number")
