from django.urls import path
from .views import (
    ApplicationCreateView,
    ApplicationDetailView,
    OfferApplicationsView,
    OfferApplicationsByStatusView,
    PendingCountView,
    ClientApplicationsView,
    PendingApplicationsView,
    RecentApplicationsView,
    UnreadApplicationsView,
    AcceptApplicationView,
    RejectApplicationView,
    ShortlistApplicationView,
    MarkApplicationReadView,
    WithdrawApplicationView,
)

urlpatterns = [
    path('', ApplicationCreateView.as_view(), name='application-apply'),
    path('pending/', PendingApplicationsView.as_view(), name='application-pending'),
    path('recent/', RecentApplicationsView.as_view(), name='application-recent'),
    path('offer/<int:offer_id>/', OfferApplicationsView.as_view(), name='application-by-offer'),
    path('offer/<int:offer_id>/status/<str:status>/', OfferApplicationsByStatusView.as_view(), name='application-by-offer-status'),
    path('offer/<int:offer_id>/pending/count/', PendingCountView.as_view(), name='application-pending-count'),
    path('client/<int:client_id>/', ClientApplicationsView.as_view(), name='application-by-client'),
    path('unread/freelancer/<int:freelancer_id>/', UnreadApplicationsView.as_view(), name='application-unread'),

    path('<int:pk>/', ApplicationDetailView.as_view(), name='application-detail'),
    path('<int:pk>/accept/', AcceptApplicationView.as_view(), name='application-accept'),
    path('<int:pk>/reject/', RejectApplicationView.as_view(), name='application-reject'),
    path('<int:pk>/shortlist/', ShortlistApplicationView.as_view(), name='application-shortlist'),
    path('<int:pk>/mark-read/', MarkApplicationReadView.as_view(), name='application-mark-read'),
    path('<int:pk>/withdraw/', WithdrawApplicationView.as_view(), name='application-withdraw'),
]
