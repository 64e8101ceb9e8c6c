from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'bills'

router = SimpleRouter()
router.register(r'', views.BillViewSet, basename='bill')

urlpatterns = [
    # GET    /api/bills/                                - List bills (filters, paginated)
    # POST   /api/bills/                                - Record bill
    # GET    /api/bills/{id}/                           - Bill details
    # PUT    /api/bills/{id}/                           - Update bill (root)
    # PATCH  /api/bills/{id}/                           - Partial update (root)
    # DELETE /api/bills/{id}/                           - Delete bill (root)
    # GET    /api/bills/check-duplicate/{bill_number}/  - Bill number taken?
    # GET    /api/bills/export/                         - Spreadsheet export
    path('', include(router.urls)),
]
