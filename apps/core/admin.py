"""
Django admin configuration for core app.
"""
from django.contrib import admin


admin.site.site_header = "Steakz Administration"
admin.site.site_title = "Steakz Admin"
admin.site.index_title = "Welcome to Steakz Administration"
