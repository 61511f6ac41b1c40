from django.contrib import admin

from .models import HSNCode, Product, SKU


class SKUInline(admin.TabularInline):
	model = SKU
	extra = 0
	fields = ("sku_code", "name", "unit", "base_price", "hsn_code", "is_active")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
	list_display = ("name", "category", "hsn_code", "is_active")
	list_filter = ("category", "is_active")
	search_fields = ("name", "hsn_code")
	inlines = [SKUInline]


@admin.register(SKU)
class SKUAdmin(admin.ModelAdmin):
	list_display = ("sku_code", "name", "product", "unit", "base_price", "hsn_code", "is_active")
	list_filter = ("is_active", "unit")
	search_fields = ("sku_code", "name", "hsn_code")


@admin.register(HSNCode)
class HSNCodeAdmin(admin.ModelAdmin):
	list_display = ("code", "description", "chapter", "gst_rate")
	list_filter = ("chapter",)
	search_fields = ("code", "description")
