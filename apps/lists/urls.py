from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'items'

router = SimpleRouter()
router.register(r'', views.ItemViewSet, basename='item')

urlpatterns = [
    # GET    /api/items/{id}/          - Get item
    # PUT    /api/items/{id}/          - Update item details
    # DELETE /api/items/{id}/          - Delete item
    # PUT    /api/items/{id}/status/   - Update item status
    path('', include(router.urls)),
]
