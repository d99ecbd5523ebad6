from django.urls import path

from accounts.views import ProfileView, RegisterView, UserUpdateView

urlpatterns = [
    path("register/", RegisterView.as_view(), name="accounts-register"),
    path("profile/", ProfileView.as_view(), name="accounts-profile"),
    path("users/<str:login>/", UserUpdateView.as_view(), name="accounts-user-update"),
]
