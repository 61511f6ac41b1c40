from django.contrib import admin

from .models import Enquiry, EnquiryItem


class EnquiryItemInline(admin.TabularInline):
	model = EnquiryItem
	extra = 1


@admin.register(Enquiry)
class EnquiryAdmin(admin.ModelAdmin):
	list_display = ("number", "version", "customer_name", "customer_company", "source", "priority", "status", "created_at")
	list_filter = ("status", "source", "priority")
	search_fields = ("number", "customer_name", "customer_company", "customer_email")
	inlines = [EnquiryItemInline]
