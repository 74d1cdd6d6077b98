"""
Authentication REST API views.

Implements endpoints for:
- Customer signup
- Login
- Current user profile
"""
from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from django_ratelimit.decorators import ratelimit
from django.utils.decorators import method_decorator
from drf_spectacular.utils import extend_schema, OpenApiExample
from drf_spectacular.types import OpenApiTypes

from apps.core.exceptions import AuthenticationRequired, RETRY_AFTER_SECONDS, _error_body
from apps.core.logging import SecurityLogger
from apps.core.permissions import BranchScopedPermission
from apps.rbac.roles import ALL_ROLES
from apps.rbac.services import AuthService
from apps.rbac.serializers import LoginSerializer, MeSerializer, SignupSerializer, UserSerializer


def _rate_limited_response(request, endpoint, limit_description):
    SecurityLogger.log_rate_limit_exceeded(
        endpoint=endpoint,
        ip_address=request.META.get('REMOTE_ADDR', 'unknown'),
        user_email=request.data.get('email') if hasattr(request.data, 'get') else None,
    )
    response = Response(
        _error_body(
            'RATE_LIMIT_EXCEEDED',
            f'Rate limit exceeded ({limit_description}). Please try again later.',
            getattr(request, 'request_id', None),
        ),
        status=status.HTTP_429_TOO_MANY_REQUESTS
    )
    response['Retry-After'] = str(RETRY_AFTER_SECONDS)
    return response


@extend_schema(
    tags=['Authentication'],
    summary='Customer signup',
    description='''
Create a customer account in a home branch and return a bearer token.

Staff accounts cannot be created here; the owner creates them through
`POST /v1/admin/staff`.

**No authentication required**. **Rate limit**: 10 requests/hour per IP
    ''',
    request=SignupSerializer,
    responses={
        201: OpenApiTypes.OBJECT,
        400: OpenApiTypes.OBJECT,
        404: OpenApiTypes.OBJECT,
        429: OpenApiTypes.OBJECT,
    },
    examples=[
        OpenApiExample(
            'Signup Request',
            value={
                'email': 'customer@example.com',
                'password': 'password123',
                'name': 'Jane Diner',
                'branch_id': 1,
            },
            request_only=True,
        ),
    ]
)
@method_decorator(ratelimit(key='ip', rate='10/h', method='POST', block=False), name='dispatch')
class SignupView(APIView):
    """
    POST /v1/auth/signup

    Register a customer. No authentication required.
    """
    authentication_classes = []
    permission_classes = []

    def post(self, request):
        if getattr(request, 'limited', False):
            return _rate_limited_response(request, '/v1/auth/signup', '10/hour per IP')

        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.signup(**serializer.validated_data)

        return Response(
            {
                'user': UserSerializer(result['user']).data,
                'token': result['token'],
            },
            status=status.HTTP_201_CREATED
        )


@extend_schema(
    tags=['Authentication'],
    summary='Login',
    description='''
Authenticate with email and password and receive a bearer token.

**Rate limit**: 5 requests/minute per IP, 10 requests/hour per email
    ''',
    request=LoginSerializer,
    responses={
        200: OpenApiTypes.OBJECT,
        401: OpenApiTypes.OBJECT,
        429: OpenApiTypes.OBJECT,
    },
    examples=[
        OpenApiExample(
            'Login Request',
            value={'email': 'manager@steakz.com', 'password': 'password123'},
            request_only=True,
        ),
    ]
)
@method_decorator(ratelimit(key='ip', rate='5/m', method='POST', block=False), name='dispatch')
@method_decorator(ratelimit(key='post:email', rate='10/h', method='POST', block=False), name='dispatch')
class LoginView(APIView):
    """
    POST /v1/auth/login

    Authenticate user and return JWT token.

    No authentication required.
    Rate limited to:
    - 5 requests per minute per IP address
    - 10 requests per hour per email address
    """
    authentication_classes = []
    permission_classes = []

    def post(self, request):
        if getattr(request, 'limited', False):
            return _rate_limited_response(request, '/v1/auth/login', '5/min per IP or 10/hour per email')

        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.login(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password']
        )

        if not result:
            SecurityLogger.log_failed_login(
                email=serializer.validated_data['email'],
                ip_address=request.META.get('REMOTE_ADDR', 'unknown'),
                user_agent=request.META.get('HTTP_USER_AGENT', 'unknown'),
                reason='Invalid credentials'
            )
            raise AuthenticationRequired('Invalid email or password.')

        return Response(
            {
                'user': UserSerializer(result['user']).data,
                'token': result['token'],
            },
            status=status.HTTP_200_OK
        )


@extend_schema(
    tags=['Authentication'],
    summary='Current user',
    responses={200: MeSerializer, 401: OpenApiTypes.OBJECT},
)
class MeView(APIView):
    """
    GET /v1/auth/me

    Current user profile with home and active branch.
    """
    permission_classes = [BranchScopedPermission]
    allowed_roles = ALL_ROLES
    branch_scoped = False

    def get(self, request):
        return Response(MeSerializer(request.user).data, status=status.HTTP_200_OK)
