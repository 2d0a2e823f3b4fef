"""URL configuration.

Django admin plus the v1 API of the availability, calendar, payment and
notification apps.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore

urlpatterns = [
    path('admin/', admin.site.urls),
    # Application URLs
    path('api/v1/', include('apps.availability.urls')),
    path('api/v1/calendar/', include('apps.calendar.urls')),
    path('api/v1/payments/', include('apps.payments.urls')),
    path('api/v1/', include('apps.notifications.urls')),
]
