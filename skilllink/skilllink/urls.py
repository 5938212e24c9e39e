"""
URL configuration for the skilllink project.

Every API route lives under /api/; the Django admin site stays at
/django-admin/ so it does not shadow /api/admin/.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from admin.auth import login, register
from admin.views import activities_report, performance_report, user_profile
from .health_check import database_status, health_check

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('api/auth/login/', login, name='auth-login'),
    path('api/auth/register/', register, name='auth-register'),
    path('api/user/profile/', user_profile, name='user-profile'),
    path('api/reports/activities/', activities_report, name='report-activities'),
    path('api/reports/performance/', performance_report, name='report-performance'),
    path('api/health/', health_check, name='health-check'),
    path('api/health/database/', database_status, name='health-database'),
    path('api/admin/', include('admin.urls')),
    path('api/', include('trainer.urls')),
    path('api/', include('worker.urls')),
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
