from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cores.pagination import StandardPagination
from apps.cores.utils import int_query_param
from .models import OfferApplication
from .serializers import (
    OfferApplicationSerializer,
    OfferApplicationRequestSerializer,
    OfferApplicationUpdateSerializer,
    acceptance_response,
)
from .services import application_service as applications
from .services.accept_application import accept_application


class ApplicationCreateView(APIView):
    '''
    A client applies to an offer.
    '''

    def post(self, request):
        serializer = OfferApplicationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        application = applications.apply_to_offer(
            serializer.validated_data["offerId"],
            serializer.validated_data["clientId"],
            **serializer.to_model_fields()
        )
        return Response(
            OfferApplicationSerializer(application).data,
            status=status.HTTP_201_CREATED
        )


class ApplicationDetailView(APIView):

    def get(self, request, pk):
        application = applications.get_application_or_404(pk)
        return Response(OfferApplicationSerializer(application).data)

    def put(self, request, pk):
        serializer = OfferApplicationUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        application = applications.update_application(
            pk,
            serializer.validated_data["clientId"],
            **serializer.to_model_fields()
        )
        return Response(OfferApplicationSerializer(application).data)

    def delete(self, request, pk):
        client_id = int_query_param(request, "clientId")
        applications.delete_application(pk, client_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---------------- Lists ----------------

class OfferApplicationsView(generics.ListAPIView):
    serializer_class = OfferApplicationSerializer
    pagination_class = StandardPagination

    def get_queryset(self):
        return applications.applications_for_offer(self.kwargs["offer_id"])


class OfferApplicationsByStatusView(generics.ListAPIView):
    serializer_class = OfferApplicationSerializer

    def get_queryset(self):
        status_value = self.kwargs["status"].upper()
        valid = [choice for choice, _ in OfferApplication.STATUS_CHOICES]
        if status_value not in valid:
            raise ValidationError({"status": f"Must be one of {valid}."})
        return applications.applications_for_offer_with_status(self.kwargs["offer_id"], status_value)


class PendingCountView(APIView):

    def get(self, request, offer_id):
        return Response(applications.count_pending_applications(offer_id))


class ClientApplicationsView(generics.ListAPIView):
    serializer_class = OfferApplicationSerializer
    pagination_class = StandardPagination

    def get_queryset(self):
        return applications.applications_for_client(self.kwargs["client_id"])


class PendingApplicationsView(generics.ListAPIView):
    serializer_class = OfferApplicationSerializer

    def get_queryset(self):
        return applications.pending_applications()


class RecentApplicationsView(generics.ListAPIView):
    serializer_class = OfferApplicationSerializer

    def get_queryset(self):
        return applications.recent_applications()


class UnreadApplicationsView(generics.ListAPIView):
    serializer_class = OfferApplicationSerializer

    def get_queryset(self):
        return applications.unread_applications_for_freelancer(self.kwargs["freelancer_id"])


# ---------------- Transitions ----------------

class AcceptApplicationView(APIView):
    '''
    Accept a pending application. The response carries contractId when the
    Contract service created the contract, warningMessage otherwise.
    '''

    def patch(self, request, pk):
        freelancer_id = int_query_param(request, "freelancerId")
        result = accept_application(pk, freelancer_id)
        return Response(acceptance_response(result))


class RejectApplicationView(APIView):

    def patch(self, request, pk):
        freelancer_id = int_query_param(request, "freelancerId")
        reason = request.query_params.get("reason")
        application = applications.reject_application(pk, freelancer_id, reason)
        return Response(OfferApplicationSerializer(application).data)


class ShortlistApplicationView(APIView):

    def patch(self, request, pk):
        freelancer_id = int_query_param(request, "freelancerId")
        application = applications.shortlist_application(pk, freelancer_id)
        return Response(OfferApplicationSerializer(application).data)


class MarkApplicationReadView(APIView):

    def patch(self, request, pk):
        freelancer_id = int_query_param(request, "freelancerId")
        application = applications.mark_application_read(pk, freelancer_id)
        return Response(OfferApplicationSerializer(application).data)


class WithdrawApplicationView(APIView):

    def patch(self, request, pk):
        client_id = int_query_param(request, "clientId")
        application = applications.withdraw_application(pk, client_id)
        return Response(OfferApplicationSerializer(application).data)
