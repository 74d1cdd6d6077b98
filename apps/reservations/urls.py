"""
Reservation API URLs.
"""
from django.urls import path
from apps.reservations.views import ReservationListView, ReservationStatusView

app_name = 'reservations'

urlpatterns = [
    path('reservations/', ReservationListView.as_view(), name='reservation-list'),
    path('reservations/<id:reservation_id>/status', ReservationStatusView.as_view(), name='reservation-status'),
]
