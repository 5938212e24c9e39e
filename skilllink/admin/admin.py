from django.contrib import admin
from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('id', 'email', 'name', 'role', 'status', 'created_at')
    list_filter = ('role', 'status')
    search_fields = ('email', 'name')
    readonly_fields = ('password_hash', 'last_login', 'created_at', 'updated_at')
