# workspace/urls.py
from django.urls import include, path

urlpatterns = [
    path('', include('workspace.board.urls')),
    path('', include('workspace.tasks.urls')),
    path('', include('workspace.comments.urls')),
    path('', include('workspace.attachments.urls')),
]
