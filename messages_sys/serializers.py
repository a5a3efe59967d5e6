from rest_framework import serializers

from .models import Message
from .services import display_name


class MessageSerializer(serializers.ModelSerializer):
    sender_name = serializers.SerializerMethodField()
    recipient_name = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = [
            'id', 'parent_id', 'sender_id', 'sender_name', 'recipient_id', 'recipient_name',
            'content', 'is_read', 'read_at', 'created_at',
        ]
        read_only_fields = fields

    def get_sender_name(self, obj):
        return display_name(obj.sender)

    def get_recipient_name(self, obj):
        return display_name(obj.recipient)


class MessageCreateSerializer(serializers.Serializer):
    jobseeker_profile_id = serializers.UUIDField()
    content = serializers.CharField(allow_blank=True)


class MessageReplySerializer(serializers.Serializer):
    content = serializers.CharField(allow_blank=True)
