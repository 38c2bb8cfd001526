from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = SimpleRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/                  - List the user's groups
    # GET    /api/groups/{id}/             - Get group details
    # PUT    /api/groups/{id}/             - Update name / image
    # DELETE /api/groups/{id}/             - Disband group

    # Custom group actions
    # GET    /api/groups/{id}/list/         - Shared list with items
    # POST   /api/groups/{id}/list/items/   - Add item to shared list
    # PUT    /api/groups/{id}/list/clear/   - Clear shared list
    # GET    /api/groups/{id}/members/      - List members
    # GET    /api/groups/{id}/invitations/  - Invitation history with counts
    # DELETE /api/groups/{id}/leave/        - Leave group

    path('', include(router.urls)),
]
