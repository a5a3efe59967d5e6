from django.contrib import admin

from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('id', 'short_content', 'sender', 'recipient', 'parent', 'created_at', 'is_read')
    list_filter = ('is_read', 'created_at')
    search_fields = ('content', 'sender__email', 'recipient__email')
    readonly_fields = ('created_at', 'read_at')

    def short_content(self, obj):
        return obj.preview
    short_content.short_description = 'Content'
