"""
URL configuration for the eximdesk project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

admin.site.site_header = "EximDesk"
admin.site.site_title = "EximDesk"
admin.site.index_title = "Export documentation"

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("eximdesk.api_urls")),
    path("api-auth/", include("rest_framework.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
