from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'accounts'

router = SimpleRouter()
router.register(r'users', views.UserViewSet, basename='user')

urlpatterns = [
    # Authentication
    path('auth/signup/', views.signup, name='signup'),
    path('auth/signin/', views.signin, name='signin'),
    path('auth/signout/', views.signout, name='signout'),
    path('auth/refresh/', views.refresh, name='refresh'),
    path('auth/me/', views.me, name='me'),

    # Users
    # GET    /api/users/{id}/                       - Profile
    # PUT    /api/users/{id}/                       - Update profile
    # DELETE /api/users/{id}/                       - Delete account
    # GET    /api/users/{id}/groups/                - User's groups
    # GET    /api/users/{id}/list/                  - Personal list
    # POST   /api/users/{id}/list/items/            - Add personal item
    # PUT    /api/users/{id}/list/clear/            - Clear personal list
    # GET    /api/users/{id}/invitations/received/  - Pending received
    # GET    /api/users/{id}/invitations/sent/      - Pending sent
    path('', include(router.urls)),
]
