from django.urls import path
from .api.summary import DashboardSummaryView
from .api.history import HistoricalLaborView

urlpatterns = [
    path('summary/', DashboardSummaryView.as_view(), name='dashboard-summary'),
    path('history/', HistoricalLaborView.as_view(), name='dashboard-history'),
]
