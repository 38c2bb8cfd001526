from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'invitations'

router = SimpleRouter()
router.register(r'', views.InvitationViewSet, basename='invitation')

urlpatterns = [
    # POST /api/invitations/invite/          - Invite a user into a group
    # POST /api/invitations/request/         - Ask to join a group by code
    # POST /api/invitations/start-group/     - Propose a new group
    # GET  /api/invitations/{id}/            - Invitation details
    # POST /api/invitations/{id}/accept/     - Accept (recipient)
    # POST /api/invitations/{id}/decline/    - Decline (recipient)
    # POST /api/invitations/{id}/cancel/     - Cancel (sender)

    path('', include(router.urls)),
]
