from django.utils import timezone
from rest_framework import generics, status
from rest_framework.filters import SearchFilter, OrderingFilter
from rest_framework.response import Response
from rest_framework.views import APIView
from django_filters.rest_framework import DjangoFilterBackend

from apps.cores.pagination import StandardPagination
from apps.cores.utils import int_query_param
from . import services
from .models import Offer
from .selectors import FreelancerApplicationStatsSelector, FreelancerOfferStatsSelector
from .serializers import (
    OfferSerializer,
    OfferWriteSerializer,
    OfferStatusSerializer,
    OfferQuestionSerializer,
    QuestionAskSerializer,
    QuestionAnswerSerializer,
)


class OfferListCreateView(generics.ListCreateAPIView):
    '''
    Browse active offers (filter, search, order) or create a new draft offer.
    '''

    queryset = Offer.objects.filter(is_active=True).with_application_counts()
    serializer_class = OfferSerializer
    pagination_class = StandardPagination

    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ["status", "domain", "category", "duration_type", "is_featured"]
    search_fields = ["title", "description", "tags"]
    ordering_fields = ["created_at", "price", "views_count", "deadline"]

    def create(self, request, *args, **kwargs):
        serializer = OfferWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        offer = services.create_offer(data.pop("freelancer_id"), **data)
        return Response(OfferSerializer(offer).data, status=status.HTTP_201_CREATED)


class OfferDetailView(APIView):

    def get(self, request, pk):
        offer = services.view_offer(pk)
        return Response(OfferSerializer(offer).data)

    def put(self, request, pk):
        serializer = OfferWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        offer = services.update_offer(pk, data.pop("freelancer_id"), **data)
        return Response(OfferSerializer(offer).data)

    def delete(self, request, pk):
        freelancer_id = int_query_param(request, "freelancerId")
        services.delete_offer(pk, freelancer_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class OfferPublishView(APIView):

    def patch(self, request, pk):
        freelancer_id = int_query_param(request, "freelancerId")
        offer = services.publish_offer(pk, freelancer_id)
        return Response(OfferSerializer(offer).data)


class OfferStatusView(APIView):
    '''
    Direct admin-style transitions (expire, close, accept, cancel, complete).
    '''

    def patch(self, request, pk):
        freelancer_id = int_query_param(request, "freelancerId")
        serializer = OfferStatusSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        offer = services.change_offer_status(pk, serializer.validated_data["status"], freelancer_id)
        return Response(OfferSerializer(offer).data)


class FreelancerOffersView(generics.ListAPIView):
    serializer_class = OfferSerializer

    def get_queryset(self):
        return (
            Offer.objects.filter(freelancer_id=self.kwargs["freelancer_id"])
            .with_application_counts()
            .order_by("-created_at")
        )


class FeaturedOffersView(generics.ListAPIView):
    serializer_class = OfferSerializer

    def get_queryset(self):
        return Offer.objects.filter(
            is_featured=True,
            is_active=True,
            status=Offer.AVAILABLE,
        ).with_application_counts().order_by("-created_at")


class OfferQuestionsView(APIView):
    '''
    Public questions on an offer. Clients ask with ?clientId=.
    '''

    def get(self, request, offer_id):
        questions = services.questions_for_offer(offer_id)
        return Response(OfferQuestionSerializer(questions, many=True).data)

    def post(self, request, offer_id):
        client_id = int_query_param(request, "clientId")
        serializer = QuestionAskSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        question = services.ask_question(offer_id, client_id, serializer.validated_data["question_text"])
        return Response(OfferQuestionSerializer(question).data, status=status.HTTP_201_CREATED)


class QuestionAnswerView(APIView):

    def patch(self, request, pk):
        freelancer_id = int_query_param(request, "freelancerId")
        serializer = QuestionAnswerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        question = services.answer_question(pk, freelancer_id, serializer.validated_data["answer_text"])
        return Response(OfferQuestionSerializer(question).data)


# ---------------- Dashboard ----------------

class FreelancerStatsView(APIView):

    def get(self, request, freelancer_id):
        return Response(FreelancerOfferStatsSelector.summary(freelancer_id))


class OffersByStatusView(APIView):

    def get(self, request, freelancer_id):
        return Response(FreelancerOfferStatsSelector.count_by_status(freelancer_id))


class AcceptanceRateView(APIView):

    def get(self, request, freelancer_id):
        return Response(FreelancerApplicationStatsSelector.acceptance_rate(freelancer_id))


class MonthlyEvolutionView(APIView):

    def get(self, request, freelancer_id):
        year = int_query_param(request, "year", required=False, default=timezone.now().year)
        return Response(FreelancerOfferStatsSelector.monthly_evolution(freelancer_id, year))
