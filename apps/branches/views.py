"""
Branch REST API views.
"""
import logging
from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiExample
from drf_spectacular.types import OpenApiTypes

from apps.branches.models import Branch
from apps.branches.serializers import (
    BranchAnalyticsSerializer, BranchSerializer, BranchSettingsSerializer,
)
from apps.branches.services import BranchService
from apps.core.exceptions import BranchRequired
from apps.core.permissions import BranchScopedPermission, requires_roles
from apps.rbac.models import AuditLog
from apps.rbac.roles import Role, ResourceCategory, TOP_ROLE

logger = logging.getLogger(__name__)


@extend_schema(
    tags=['Branches'],
    summary='List branches',
    description='The owner sees every branch; staff see only their home branch.',
    responses={200: BranchSerializer(many=True)},
)
@requires_roles(Role.ADMIN, Role.MANAGER, Role.CHEF, Role.STAFF)
class BranchListView(APIView):
    """
    GET /v1/branches
    """
    permission_classes = [BranchScopedPermission]
    branch_scoped = False

    def get(self, request):
        queryset = Branch.objects.all().order_by('name')
        if request.actor.role != TOP_ROLE:
            if request.user.branch_id is None:
                raise BranchRequired()
            queryset = queryset.filter(pk=request.user.branch_id)

        serializer = BranchSerializer(queryset, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)


@extend_schema(
    tags=['Branches'],
    summary='Seed sample branches',
    description='Create the London, Paris and Madrid sample branches. Idempotent. **Owner only**.',
    request=None,
    responses={200: OpenApiTypes.OBJECT},
    examples=[
        OpenApiExample(
            'Summary',
            value={'summary': [{'name': 'Steakz London', 'status': 'created', 'id': 1}]},
            response_only=True,
        )
    ]
)
@requires_roles(Role.ADMIN)
class BranchSeedSampleView(APIView):
    """
    POST /v1/branches/seed-sample
    """
    permission_classes = [BranchScopedPermission]
    branch_scoped = False

    def post(self, request):
        summary = BranchService.seed_sample_branches()
        return Response({'summary': summary}, status=status.HTTP_200_OK)


@extend_schema(
    tags=['Branches'],
    summary='Branch analytics',
    description='''
Sales, reservation, approved-feedback and low-stock figures for one branch.

Managers may only read their own branch.
    ''',
    responses={200: BranchAnalyticsSerializer, 403: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
)
@requires_roles(Role.ADMIN, Role.MANAGER, category=ResourceCategory.BRANCH)
class BranchAnalyticsView(APIView):
    """
    GET /v1/branches/{branch_id}/analytics
    """
    permission_classes = [BranchScopedPermission]
    branch_url_kwarg = 'branch_id'
    branch_is_resource = True

    def get(self, request, branch_id):
        branch = BranchService.get_branch(branch_id)
        return Response(BranchService.get_analytics(branch), status=status.HTTP_200_OK)


@extend_schema_view(
    get=extend_schema(
        tags=['Branches'],
        summary='Get branch settings',
        responses={200: BranchSettingsSerializer, 403: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
    ),
    patch=extend_schema(
        tags=['Branches'],
        summary='Update branch settings',
        description='Partial update of address, contact details, timezone, coordinates, hours and holidays.',
        request=BranchSettingsSerializer,
        responses={200: BranchSettingsSerializer, 400: OpenApiTypes.OBJECT, 403: OpenApiTypes.OBJECT},
        examples=[
            OpenApiExample(
                'Update hours',
                value={'opening_time': '10:00', 'closing_time': '23:00'},
                request_only=True,
            )
        ]
    ),
)
@requires_roles(Role.ADMIN, Role.MANAGER, category=ResourceCategory.BRANCH)
class BranchSettingsView(APIView):
    """
    GET   /v1/branches/{branch_id}/settings
    PATCH /v1/branches/{branch_id}/settings
    """
    permission_classes = [BranchScopedPermission]
    branch_url_kwarg = 'branch_id'
    branch_is_resource = True

    def get(self, request, branch_id):
        branch = BranchService.get_branch(branch_id)
        return Response(BranchSettingsSerializer(branch).data, status=status.HTTP_200_OK)

    def patch(self, request, branch_id):
        branch = BranchService.get_branch(branch_id)

        serializer = BranchSettingsSerializer(branch, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()

        AuditLog.log_action(
            action='branch_settings_updated',
            user=request.user,
            branch_id=branch.id,
            target_type='Branch',
            target_id=branch.id,
            diff={'after': request.data if isinstance(request.data, dict) else {}},
            request=request,
        )
        logger.info(
            "Branch settings updated",
            extra={'branch_id': branch.id, 'fields': sorted(serializer.validated_data)}
        )
        return Response(serializer.data, status=status.HTTP_200_OK)
