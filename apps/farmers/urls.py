from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'farmers'

router = SimpleRouter()
router.register(r'', views.FarmerViewSet, basename='farmer')

urlpatterns = [
    # GET    /api/farmers/            - List farmers
    # POST   /api/farmers/            - Create farmer (root)
    # GET    /api/farmers/{id}/       - Farmer details
    # PUT    /api/farmers/{id}/       - Update farmer (root)
    # PATCH  /api/farmers/{id}/       - Partial update (root)
    # DELETE /api/farmers/{id}/       - Delete farmer (root)
    # GET    /api/farmers/similar/    - Similar-name report (root)
    path('', include(router.urls)),
]
