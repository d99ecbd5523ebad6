from django.contrib import admin
from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("login", "role", "phone_number", "favorite_item", "is_active", "created_at")
    list_filter = ("role", "is_active")
    search_fields = ("login", "phone_number")
    # Passwords are changed through the profile/update-user flows (hashed), never edited raw.
    exclude = ("password", "last_login")
    readonly_fields = ("created_at",)
