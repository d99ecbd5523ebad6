from rest_framework import serializers

from accounts.models import User


class UserSerializer(serializers.ModelSerializer):
    favorite_item = serializers.SlugRelatedField(slug_field="name", read_only=True)

    class Meta:
        model = User
        fields = ("login", "role", "favorite_item", "phone_number")


class RegisterSerializer(serializers.Serializer):
    login = serializers.CharField(max_length=50)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    phone_number = serializers.CharField(max_length=20)


class FieldUpdateSerializer(serializers.Serializer):
    """{"field": "phone_number", "value": "555-0100"}; choices are enforced by the service."""
    field = serializers.CharField(max_length=30)
    value = serializers.CharField(allow_blank=True, trim_whitespace=False)
