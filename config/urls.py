"""
URL configuration for the grocery lists project.

    /api/auth/...         signup, signin, signout, refresh, me
    /api/users/...        profile, personal list, user's groups and invitations
    /api/groups/...       group details, shared list, members, leave, disband
    /api/items/...        single item reads and mutations
    /api/invitations/...  invite, request, start-group, accept, decline, cancel
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from config.views import health_check

urlpatterns = [
    # Health check (for Render)
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # API endpoints
    path('api/', include('apps.accounts.urls')),
    path('api/groups/', include('apps.groups.urls')),
    path('api/items/', include('apps.lists.urls')),
    path('api/invitations/', include('apps.invitations.urls')),
]

# Media files (development only)
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
