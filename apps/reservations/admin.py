"""
Django admin configuration for reservations.
"""
from django.contrib import admin
from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ['id', 'branch', 'user', 'date', 'time', 'guests', 'status']
    list_filter = ['branch', 'status', 'date']
    search_fields = ['user__email', 'notes']
