from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cores.utils import int_query_param
from .serializers import NotificationSerializer, CreateNotificationSerializer
from .services import create_notifications as notifications


class NotificationListCreateView(APIView):
    '''
    GET: a recipient's notifications, newest first.
    POST: record a notification on behalf of another service.
    '''

    def get(self, request):
        recipient_user_id = int_query_param(request, "recipientUserId")
        limit = int_query_param(request, "limit", required=False)

        items = notifications.list_for_recipient(recipient_user_id, limit)
        return Response(NotificationSerializer(items, many=True).data)

    def post(self, request):
        serializer = CreateNotificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        notifications.create_from_request(
            data["recipientUserId"],
            data["type"],
            data["title"],
            data.get("message", ""),
            offer_id=data.get("offerId"),
            question_id=data.get("questionId"),
            application_id=data.get("applicationId"),
        )
        return Response(status=status.HTTP_201_CREATED)


class UnreadCountView(APIView):

    def get(self, request):
        recipient_user_id = int_query_param(request, "recipientUserId")
        return Response({"count": notifications.count_unread(recipient_user_id)})


class MarkNotificationReadView(APIView):

    def patch(self, request, pk):
        user_id = int_query_param(request, "userId")
        notifications.mark_as_read(pk, user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
