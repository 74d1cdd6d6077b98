"""
RBAC REST API views.

Implements endpoints for:
- Owner active-branch selection
- Staff administration (list per branch, create, password reset)
"""
from rest_framework import status
from rest_framework.exceptions import PermissionDenied
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiExample
from drf_spectacular.types import OpenApiTypes

from apps.branches.serializers import BranchSummarySerializer
from apps.core.pagination import StandardResultsSetPagination
from apps.core.permissions import BranchScopedPermission, requires_roles
from apps.rbac.roles import Role, ResourceCategory
from apps.rbac.services import ActiveBranchService, StaffService
from apps.rbac.serializers import (
    ActiveBranchSerializer, PasswordResetSerializer,
    StaffCreateSerializer, UserSerializer,
)


def _active_branch_payload(user):
    branch = ActiveBranchService.get_active_branch(user)
    return {
        'active_branch_id': user.active_branch_id,
        'active_branch': BranchSummarySerializer(branch).data if branch else None,
    }


@extend_schema_view(
    get=extend_schema(
        tags=['Staff'],
        summary='Get active branch',
        description='Active branch of the calling owner or manager. Only the caller\'s own record is readable.',
        responses={200: OpenApiTypes.OBJECT, 403: OpenApiTypes.OBJECT},
    ),
    patch=extend_schema(
        tags=['Staff'],
        summary='Switch active branch',
        description='''
Select the branch that scopes the owner's requests when no branch is named.
Send `{"branch_id": null}` to clear the selection.

**Owner only**, and only on the owner's own record.
        ''',
        request=ActiveBranchSerializer,
        responses={200: OpenApiTypes.OBJECT, 400: OpenApiTypes.OBJECT, 403: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
        examples=[
            OpenApiExample('Switch', value={'branch_id': 2}, request_only=True),
            OpenApiExample('Clear', value={'branch_id': None}, request_only=True),
        ]
    ),
)
@requires_roles(Role.ADMIN, Role.MANAGER, methods=['GET'])
@requires_roles(Role.ADMIN, methods=['PATCH'])
class ActiveBranchView(APIView):
    """
    GET   /v1/users/{id}/active-branch
    PATCH /v1/users/{id}/active-branch
    """
    permission_classes = [BranchScopedPermission]
    branch_scoped = False

    def _check_self(self, request, user_id):
        if user_id != request.user.id:
            raise PermissionDenied('Cannot access another user\'s active branch.')

    def get(self, request, user_id):
        self._check_self(request, user_id)
        return Response(_active_branch_payload(request.user), status=status.HTTP_200_OK)

    def patch(self, request, user_id):
        self._check_self(request, user_id)

        serializer = ActiveBranchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ActiveBranchService.set_active_branch(
            request.user,
            serializer.validated_data['branch_id'],
            request=request,
        )
        return Response(_active_branch_payload(request.user), status=status.HTTP_200_OK)


@extend_schema(
    tags=['Staff'],
    summary='List branch staff',
    description='Managers, chefs and front staff of a branch. Managers may only list their own branch.',
    responses={200: UserSerializer(many=True), 403: OpenApiTypes.OBJECT},
)
@requires_roles(Role.ADMIN, Role.MANAGER, category=ResourceCategory.STAFF)
class StaffListView(APIView):
    """
    GET /v1/admin/staff/{branch_id}
    """
    permission_classes = [BranchScopedPermission]
    branch_url_kwarg = 'branch_id'
    branch_is_resource = True
    pagination_class = StandardResultsSetPagination

    def get(self, request, branch_id):
        queryset = StaffService.list_staff(branch_id)

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(queryset, request, view=self)
        serializer = UserSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)


@extend_schema(
    tags=['Staff'],
    summary='Create staff member',
    description='Create a MANAGER, CHEF or STAFF account in a branch. **Owner only**.',
    request=StaffCreateSerializer,
    responses={201: UserSerializer, 400: OpenApiTypes.OBJECT, 403: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
    examples=[
        OpenApiExample(
            'Create Chef',
            value={'email': 'chef2@steakz.com', 'password': 'password123', 'role': 'CHEF', 'branch_id': 1},
            request_only=True,
        )
    ]
)
@requires_roles(Role.ADMIN, category=ResourceCategory.STAFF)
class StaffCreateView(APIView):
    """
    POST /v1/admin/staff
    """
    permission_classes = [BranchScopedPermission]
    branch_scoped = False

    def post(self, request):
        serializer = StaffCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = StaffService.create_staff(
            created_by=request.user,
            request=request,
            **serializer.validated_data
        )
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@extend_schema(
    tags=['Staff'],
    summary='Reset staff password',
    description='Set a new password (at least 3 characters) for a user. **Owner only**.',
    request=PasswordResetSerializer,
    responses={200: OpenApiTypes.OBJECT, 400: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
)
@requires_roles(Role.ADMIN, category=ResourceCategory.STAFF)
class StaffResetPasswordView(APIView):
    """
    PATCH /v1/admin/staff/{id}/reset-password
    """
    permission_classes = [BranchScopedPermission]
    branch_scoped = False

    def patch(self, request, user_id):
        serializer = PasswordResetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = StaffService.reset_password(
            user_id,
            serializer.validated_data['password'],
            reset_by=request.user,
            request=request,
        )
        return Response(
            {
                'message': 'Password reset successfully',
                'user': UserSerializer(user).data,
            },
            status=status.HTTP_200_OK
        )
