from django.contrib import admin

from .models import Entity


@admin.register(Entity)
class EntityAdmin(admin.ModelAdmin):
	list_display = ("name", "entity_type", "country", "email", "phone", "verification_status")
	list_filter = ("entity_type", "verification_status", "country")
	search_fields = ("name", "email", "phone", "tax_id")
