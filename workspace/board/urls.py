# workspace/board/urls.py
from django.urls import path

from . import views

urlpatterns = [
    # Boards
    path('projects/<uuid:project_id>/boards/', views.ProjectBoardsView.as_view(), name='board_list_create'),
    path('boards/<uuid:pk>/', views.BoardDetailView.as_view(), name='board_detail'),

    # Columns
    path('boards/<uuid:pk>/columns/', views.BoardColumnsView.as_view(), name='column_create'),
    path('columns/reorder/<uuid:board_id>/', views.ReorderColumnsView.as_view(), name='column_reorder'),
    path('columns/<uuid:pk>/', views.ColumnDetailView.as_view(), name='column_detail'),
]
