from django.contrib import admin

from .models import Quote, QuoteItem


class QuoteItemInline(admin.TabularInline):
	model = QuoteItem
	extra = 1
	readonly_fields = ("total_price",)


@admin.register(Quote)
class QuoteAdmin(admin.ModelAdmin):
	list_display = ("number", "version", "buyer", "status", "currency", "total_amount", "valid_until", "created_at")
	list_filter = ("status", "currency")
	search_fields = ("number", "buyer__name")
	readonly_fields = ("number", "version", "revised_from", "subtotal_amount", "discount_amount", "tax_amount", "total_amount")
	inlines = [QuoteItemInline]
