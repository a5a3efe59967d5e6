from django.contrib import admin

from .models import Report


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ('id', 'target_type', 'target_id', 'reason', 'reporter', 'status', 'created_at')
    list_filter = ('status', 'target_type', 'reason')
    search_fields = ('reporter__email', 'note')
    readonly_fields = ('id', 'reviewed_by', 'reviewed_at', 'created_at', 'updated_at')
    ordering = ('-created_at',)
