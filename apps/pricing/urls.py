from django.urls import path

from . import views

app_name = 'pricing'

urlpatterns = [
    path('settings/', views.settings_detail, name='settings'),
    path('prices/', views.price_list, name='price-list'),
    path('prices/check/', views.price_check, name='price-check'),
    path('prices/<uuid:entry_id>/', views.price_detail, name='price-detail'),
]
