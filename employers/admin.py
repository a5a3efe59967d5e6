from django.contrib import admin

from .models import EmployerProfile, EmployerSavedSnapshot, VerificationDecision


class VerificationDecisionInline(admin.TabularInline):
    model = VerificationDecision
    fk_name = 'employer'
    extra = 0
    can_delete = False
    readonly_fields = ('action', 'from_status', 'to_status', 'reviewer', 'notes', 'created_at')

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(EmployerProfile)
class EmployerProfileAdmin(admin.ModelAdmin):
    list_display = ('display_name', 'employer_type', 'user', 'verification_status', 'created_at')
    list_filter = ('verification_status', 'employer_type')
    search_fields = ('display_name', 'company_name', 'registration_number', 'user__email')
    # Status only changes through the review endpoint so decisions are audited
    readonly_fields = ('id', 'verification_status', 'verification_notes', 'verification_date',
                       'created_at', 'updated_at')
    inlines = [VerificationDecisionInline]


@admin.register(EmployerSavedSnapshot)
class EmployerSavedSnapshotAdmin(admin.ModelAdmin):
    list_display = ('employer', 'jobseeker', 'snapshot_version', 'saved_at')
    search_fields = ('employer__display_name', 'jobseeker__full_name')
    readonly_fields = ('id', 'employer', 'jobseeker', 'cv', 'snapshot_version', 'data', 'saved_at')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
