from django.contrib import admin

from .models import AdminUser


@admin.register(AdminUser)
class AdminUserAdmin(admin.ModelAdmin):
    list_display = ("id", "username", "role", "created_at")
    list_filter = ("role",)
    search_fields = ("username",)
    ordering = ("username",)
    readonly_fields = ("password_hash", "created_at")
