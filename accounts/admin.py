"""
Accounts Admin
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ['email', 'username', 'role', 'is_active', 'is_staff', 'date_joined']
    list_filter = ['role', 'is_active', 'is_staff']
    search_fields = ['email', 'username', 'first_name', 'last_name']
    readonly_fields = ['uuid', 'date_joined', 'last_login']
    fieldsets = UserAdmin.fieldsets + (
        ('SeaVitae', {'fields': ('uuid', 'role')}),
    )
