from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    path('summary/', views.summary, name='summary'),
    path('timeseries/', views.timeseries, name='timeseries'),
    path('farmers/top/', views.top_farmers, name='top-farmers'),
]
