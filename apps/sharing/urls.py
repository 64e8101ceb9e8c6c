from django.urls import path

from . import views

app_name = 'sharing'

urlpatterns = [
    path('', views.share_create, name='share-create'),
    path('<str:token>/', views.share_validate, name='share-validate'),
    path('<str:token>/bills/', views.shared_bills, name='shared-bills'),
]
