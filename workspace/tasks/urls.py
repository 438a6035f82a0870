# workspace/tasks/urls.py
from django.urls import path

from . import views

urlpatterns = [
    path('tasks/', views.TaskListCreateView.as_view(), name='task_list_create'),
    path('tasks/stats/<uuid:project_id>/', views.TaskStatisticsView.as_view(), name='task_stats'),
    path('tasks/reorder/<uuid:column_id>/', views.ReorderTasksView.as_view(), name='task_reorder'),
    path('tasks/<uuid:pk>/', views.TaskDetailView.as_view(), name='task_detail'),
    path('tasks/<uuid:pk>/move/', views.MoveTaskView.as_view(), name='task_move'),
]
