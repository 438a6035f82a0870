from django.urls import path

from . import views

urlpatterns = [
    path('tasks/<uuid:task_id>/comments/', views.TaskCommentsView.as_view(), name='task_comments'),
    path('comments/<uuid:pk>/', views.CommentDetailView.as_view(), name='comment_detail'),
]
