# tracker/urls.py
from django.urls import include, path

from .views import HealthView

api_patterns = [
    path('health/', HealthView.as_view(), name='health'),
    path('health/detailed/', HealthView.as_view(detailed=True), name='health-detailed'),
    path('auth/', include('accounts.urls')),
    path('', include('projects.urls')),
    path('', include('workspace.urls')),
]

urlpatterns = [
    path('api/', include(api_patterns)),
]
