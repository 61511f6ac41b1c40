from django.contrib import admin

from .models import Document


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
	list_display = ("title", "doc_type", "version", "is_generated", "uploaded_by", "created_at")
	list_filter = ("doc_type", "is_generated")
	search_fields = ("title", "uploaded_by__email")
