from django.contrib import admin

from .models import CVDocument, CVSection, JobSeekerProfile


class CVSectionInline(admin.TabularInline):
    model = CVSection
    extra = 0
    readonly_fields = ('section_type', 'content', 'position', 'updated_at')
    exclude = ('search_text',)


@admin.register(JobSeekerProfile)
class JobSeekerProfileAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'user', 'city', 'preferred_role', 'publication_state', 'updated_at')
    list_filter = ('publication_state', 'city')
    search_fields = ('full_name', 'user__email', 'preferred_role')
    readonly_fields = ('id', 'publication_state', 'published_at', 'created_at', 'updated_at')


@admin.register(CVDocument)
class CVDocumentAdmin(admin.ModelAdmin):
    list_display = ('profile', 'version', 'is_locked', 'updated_at')
    search_fields = ('profile__full_name', 'profile__user__email')
    readonly_fields = ('id', 'profile', 'version', 'created_at', 'updated_at')
    inlines = [CVSectionInline]

    def is_locked(self, obj):
        return obj.is_locked
    is_locked.boolean = True
    is_locked.short_description = 'Locked'
