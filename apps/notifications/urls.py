from django.urls import path
from .views import NotificationListCreateView, UnreadCountView, MarkNotificationReadView

urlpatterns = [
    path('', NotificationListCreateView.as_view(), name='notification-list'),
    path('unread-count/', UnreadCountView.as_view(), name='notification-unread-count'),
    path('<int:pk>/read/', MarkNotificationReadView.as_view(), name='notification-read'),
]
