"""
Custom DRF authentication classes.
"""
from rest_framework.authentication import BaseAuthentication, get_authorization_header


class JWTAuthentication(BaseAuthentication):
    """
    Resolve ``Authorization: Bearer <token>`` to an active user.

    A missing, malformed, expired or unknown credential yields no user at
    all; the branch guard then reports a generic authentication failure
    without saying which of those it was.
    """

    keyword = 'Bearer'

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            return None

        try:
            token = auth[1].decode()
        except UnicodeError:
            return None

        from apps.rbac.services import AuthService

        user = AuthService.get_user_from_jwt(token)
        if user is None:
            return None
        return (user, token)

    def authenticate_header(self, request):
        return self.keyword
