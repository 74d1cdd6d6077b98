"""
URL configuration for Steakz.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

import apps.core.converters  # noqa: F401  registers <id:...>

urlpatterns = [
    path('admin/', admin.site.urls),

    # API Documentation
    path('schema/', SpectacularAPIView.as_view(), name='schema'),
    path('schema/swagger/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),

    # API v1
    path('v1/', include('apps.core.urls')),

    # Authentication endpoints
    path('v1/auth/', include('apps.rbac.urls_auth')),  # signup, login, me

    # Staff administration and owner active branch
    path('v1/', include('apps.rbac.urls')),

    # Branch listing, settings, analytics
    path('v1/', include('apps.branches.urls')),

    path('v1/', include('apps.orders.urls')),
    path('v1/', include('apps.inventory.urls')),
    path('v1/', include('apps.reservations.urls')),
    path('v1/', include('apps.feedback.urls')),
]
