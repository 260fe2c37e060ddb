"""
CHAT App - Demo chat API
"""

from rest_framework import status, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from .services import Conversation


class ChatMessagesView(APIView):
    """
    GET  /api/chat/messages/  conversation history
    POST /api/chat/messages/  {"text": "..."} encrypt and append
    """

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        conversation = Conversation(request.user.pk)
        return Response({
            'encryption_enabled': True,
            'messages': conversation.messages(),
        })

    def post(self, request):
        conversation = Conversation(request.user.pk)
        try:
            message = conversation.send(request.data.get('text', ''))
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(message, status=status.HTTP_201_CREATED)
