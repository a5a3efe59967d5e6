from rest_framework import serializers

from .models import MAX_NOTE_LENGTH, Report


class ReportSerializer(serializers.ModelSerializer):
    class Meta:
        model = Report
        fields = [
            'id', 'target_type', 'target_id', 'reason', 'note', 'status',
            'reviewed_at', 'reviewer_notes', 'created_at',
        ]
        read_only_fields = fields


class ReviewReportSerializer(ReportSerializer):
    """Admin projection; includes the reporter."""

    reporter_email = serializers.EmailField(source='reporter.email', read_only=True)

    class Meta(ReportSerializer.Meta):
        fields = ReportSerializer.Meta.fields + ['reporter_id', 'reporter_email']
        read_only_fields = fields


class ReportCreateSerializer(serializers.Serializer):
    target_type = serializers.CharField()
    target_id = serializers.UUIDField()
    reason = serializers.CharField()
    note = serializers.CharField(required=False, allow_blank=True, default='', max_length=MAX_NOTE_LENGTH)


class ResolveInputSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=['reviewed', 'dismissed'])
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class ReportQueueQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Report.Status.values, required=False)
    target_type = serializers.ChoiceField(choices=Report.TargetType.values, required=False)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(min_value=1, required=False)
