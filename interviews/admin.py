from django.contrib import admin

from .models import InterviewRequest


@admin.register(InterviewRequest)
class InterviewRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'employer', 'jobseeker', 'interview_type', 'status', 'proposed_at', 'created_at')
    list_filter = ('status', 'interview_type')
    search_fields = ('employer__display_name', 'jobseeker__full_name')
    readonly_fields = ('id', 'status', 'responded_at', 'cancelled_at', 'completed_at', 'created_at', 'updated_at')
    ordering = ('-created_at',)
