from django.urls import path

from . import views

urlpatterns = [
    path('attachments/<uuid:pk>/', views.AttachmentView.as_view(), name='attachments'),
    path('attachments/<uuid:pk>/download/', views.AttachmentDownloadView.as_view(), name='attachment_download'),
]
