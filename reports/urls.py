"""
REPORTS App - URL Configuration
"""

from django.urls import path
from . import views

urlpatterns = [
    # Overview dashboard
    path('overview/', views.overview_api, name='overview'),

    # Exports
    path('reports/rates.csv', views.rate_table_export, name='rate-table-csv'),
]
