from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.access import Action, ensure_allowed
from accounts.serializers import FieldUpdateSerializer, RegisterSerializer, UserSerializer
from accounts.services import register_user, update_profile, update_user


class RegisterView(APIView):
    """POST /api/accounts/register/  (anonymous; new users are customers)"""
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        ser = RegisterSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = register_user(**ser.validated_data)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class ProfileView(APIView):
    """
    GET   /api/accounts/profile/
    PATCH /api/accounts/profile/   body: {"field": ..., "value": ...}
    """

    def get(self, request, *args, **kwargs):
        ensure_allowed(request.user.role, Action.VIEW_PROFILE)
        return Response(UserSerializer(request.user).data, status=status.HTTP_200_OK)

    def patch(self, request, *args, **kwargs):
        ser = FieldUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = update_profile(request.user, ser.validated_data["field"], ser.validated_data["value"])
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)


class UserUpdateView(APIView):
    """PATCH /api/accounts/users/{login}/  (manager)"""

    def patch(self, request, login, *args, **kwargs):
        ser = FieldUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = update_user(request.user, login, ser.validated_data["field"], ser.validated_data["value"])
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)
