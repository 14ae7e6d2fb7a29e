# accounts/urls.py
"""
URL configuration for authentication.

Endpoints:
- /token/ - obtain an access/refresh JWT pair
- /token/refresh/ - rotate a refresh token
- /token/blacklist/ - revoke a refresh token (logout)
"""

from django.urls import path
from rest_framework_simplejwt.views import (
    TokenBlacklistView,
    TokenObtainPairView,
    TokenRefreshView,
)

app_name = "accounts"

urlpatterns = [
    path("token/", TokenObtainPairView.as_view(), name="token-obtain"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("token/blacklist/", TokenBlacklistView.as_view(), name="token-blacklist"),
]
