"""
Order API URLs.
"""
from django.urls import path
from apps.orders.views import OrderListView, OrderStatusView

app_name = 'orders'

urlpatterns = [
    path('orders/', OrderListView.as_view(), name='order-list'),
    path('orders/<id:order_id>/status', OrderStatusView.as_view(), name='order-status'),
]
