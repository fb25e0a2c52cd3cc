"""URL patterns for user and authentication endpoints."""

from django.urls import re_path

from .views import CurrentUserView, GoogleCallbackView, GoogleLoginView, UserViewSet

user_list = UserViewSet.as_view({"get": "list"})
user_detail = UserViewSet.as_view({"get": "retrieve", "put": "update"})

urlpatterns = [
    re_path(r"^users/?$", user_list, name="user-list"),
    re_path(r"^users/(?P<pk>[^/]+)/?$", user_detail, name="user-detail"),
    re_path(r"^auth/?$", CurrentUserView.as_view(), name="auth-current-user"),
    re_path(r"^auth/google-login/?$", GoogleLoginView.as_view(), name="auth-google-login"),
    re_path(r"^auth/google-callback/?$", GoogleCallbackView.as_view(), name="auth-google-callback"),
]
