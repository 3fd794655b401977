from django.urls import path
from .views import (
    OfferListCreateView,
    OfferDetailView,
    OfferPublishView,
    OfferStatusView,
    FreelancerOffersView,
    FeaturedOffersView,
    OfferQuestionsView,
    QuestionAnswerView,
    FreelancerStatsView,
    OffersByStatusView,
    AcceptanceRateView,
    MonthlyEvolutionView,
)

urlpatterns = [
    path('', OfferListCreateView.as_view(), name='offer-list'),
    path('featured/', FeaturedOffersView.as_view(), name='offer-featured'),
    path('freelancer/<int:freelancer_id>/', FreelancerOffersView.as_view(), name='offer-by-freelancer'),
    path('<int:pk>/', OfferDetailView.as_view(), name='offer-detail'),
    path('<int:pk>/publish/', OfferPublishView.as_view(), name='offer-publish'),
    path('<int:pk>/status/', OfferStatusView.as_view(), name='offer-status'),

    # questions
    path('<int:offer_id>/questions/', OfferQuestionsView.as_view(), name='offer-questions'),
    path('questions/<int:pk>/answer/', QuestionAnswerView.as_view(), name='offer-question-answer'),

    # dashboard
    path('stats/freelancer/<int:freelancer_id>/', FreelancerStatsView.as_view(), name='offer-stats'),
    path('stats/freelancer/<int:freelancer_id>/by-status/', OffersByStatusView.as_view(), name='offer-stats-by-status'),
    path('stats/freelancer/<int:freelancer_id>/acceptance-rate/', AcceptanceRateView.as_view(), name='offer-stats-acceptance-rate'),
    path('stats/freelancer/<int:freelancer_id>/monthly-evolution/', MonthlyEvolutionView.as_view(), name='offer-stats-monthly-evolution'),
]
