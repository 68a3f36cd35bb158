"""Authentication classes beyond the default bearer header."""

from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication  # type: ignore


class QueryParamJWTAuthentication(JWTAuthentication):
    """Accept the access token as ``?token=`` for clients that cannot set headers.

    Browsers' EventSource API has no way to send an Authorization header,
    so the notification stream takes the token from the query string.
    """

    def authenticate(self, request):  # type: ignore
        header_result = super().authenticate(request)
        if header_result is not None:
            return header_result
        raw_token = request.query_params.get("token")
        if not raw_token:
            return None
        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token
