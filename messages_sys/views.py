"""
Message API views.

Endpoints (under /api/v1/messages/):
    ''                        GET, POST   inbox or sent box / employer starts a thread
    read-all/                 POST        mark every received message read
    conversation/<int>/       GET         messages exchanged with one account
    <uuid>/                   DELETE      sender deletes a message
    <uuid>/reply/             POST        either participant replies
    <uuid>/thread/            GET         whole thread, oldest first
    <uuid>/read/              POST        recipient marks a message read
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from core.api import result_response, validation_response
from core.permissions import IsEmployer

from .serializers import MessageCreateSerializer, MessageReplySerializer, MessageSerializer
from .services import MessageService


def _message_data(message):
    return MessageSerializer(message).data


def _page_data(data):
    return {**data, 'results': MessageSerializer(data['results'], many=True).data}


class MessageListView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        result = MessageService.inbox(
            request.user,
            box=request.query_params.get('box'),
            page=request.query_params.get('page'),
            limit=request.query_params.get('limit'),
        )
        return result_response(result, _page_data)

    def post(self, request):
        if not IsEmployer().has_permission(request, self):
            self.permission_denied(request, message=IsEmployer.message)

        serializer = MessageCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        result = MessageService.send(
            request.user,
            serializer.validated_data['jobseeker_profile_id'],
            serializer.validated_data['content'],
        )
        return result_response(result, _message_data, success_status=status.HTTP_201_CREATED)


class MessageDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def delete(self, request, message_id):
        return result_response(
            MessageService.delete(request.user, message_id),
            success_status=status.HTTP_204_NO_CONTENT,
        )


class ReplyView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, message_id):
        serializer = MessageReplySerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        result = MessageService.reply(request.user, message_id, serializer.validated_data['content'])
        return result_response(result, _message_data, success_status=status.HTTP_201_CREATED)


class ThreadView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, message_id):
        return result_response(
            MessageService.thread(request.user, message_id),
            lambda messages: {'results': MessageSerializer(messages, many=True).data},
        )


class ConversationView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, user_id):
        result = MessageService.conversation(
            request.user,
            user_id,
            page=request.query_params.get('page'),
            limit=request.query_params.get('limit'),
        )
        return result_response(result, _page_data)


class MarkReadView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, message_id):
        return result_response(MessageService.mark_read(request.user, message_id), _message_data)


class MarkAllReadView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        return result_response(MessageService.mark_all_read(request.user))
