from django.urls import path

from . import views

urlpatterns = [
    path('projects/', views.ProjectListCreateView.as_view(), name='project_list_create'),
    path('projects/<uuid:pk>/', views.ProjectDetailView.as_view(), name='project_detail'),
    path('projects/<uuid:pk>/members/', views.ProjectMemberCreateView.as_view(), name='project_member_add'),
    path('projects/<uuid:pk>/members/<uuid:user_id>/', views.ProjectMemberDetailView.as_view(), name='project_member_detail'),
]
