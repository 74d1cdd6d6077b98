"""
Feedback API views.
"""
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter, OpenApiExample
from drf_spectacular.types import OpenApiTypes

from apps.branches.services import BranchService
from apps.core.exceptions import ResourceNotFound
from apps.core.pagination import StandardResultsSetPagination
from apps.core.permissions import BranchScopedPermission, requires_roles
from apps.feedback.models import Feedback
from apps.feedback.serializers import FeedbackCreateSerializer, FeedbackReplySerializer, FeedbackSerializer
from apps.feedback.services import FeedbackService
from apps.rbac.roles import Role, ResourceCategory

MODERATOR_ROLES = (Role.ADMIN, Role.MANAGER, Role.STAFF)


class FeedbackObjectMixin:
    """Load a feedback entry by id and run the object-level branch check."""

    def get_object(self, feedback_id):
        feedback = Feedback.objects.select_related('user').filter(pk=feedback_id).first()
        if feedback is None:
            raise ResourceNotFound('Feedback not found.')
        self.check_object_permissions(self.request, feedback)
        return feedback


@requires_roles(*MODERATOR_ROLES, Role.CUSTOMER, category=ResourceCategory.FEEDBACK)
class FeedbackListView(APIView):
    """
    GET  /v1/feedback/ - Feedback of the effective branch (customers: their own)
    POST /v1/feedback/ - Leave feedback for the effective branch
    """
    permission_classes = [BranchScopedPermission]
    pagination_class = StandardResultsSetPagination

    @extend_schema(
        tags=['Feedback'],
        summary='List feedback',
        parameters=[
            OpenApiParameter(
                name='branch_id',
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                description='Branch to read. Honoured for the owner only.'
            ),
            OpenApiParameter(
                name='approved',
                type=OpenApiTypes.BOOL,
                location=OpenApiParameter.QUERY,
            ),
        ],
        responses={200: FeedbackSerializer(many=True)},
    )
    def get(self, request):
        queryset = Feedback.objects.for_branch(request.effective_branch_id).select_related('user')
        if request.actor.role == Role.CUSTOMER:
            queryset = queryset.for_user(request.user)

        approved = request.query_params.get('approved', '').lower()
        if approved in ('true', '1'):
            queryset = queryset.approved()
        elif approved in ('false', '0'):
            queryset = queryset.pending()

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(queryset, request, view=self)
        return paginator.get_paginated_response(FeedbackSerializer(page, many=True).data)

    @extend_schema(
        tags=['Feedback'],
        summary='Leave feedback',
        request=FeedbackCreateSerializer,
        responses={201: FeedbackSerializer, 400: OpenApiTypes.OBJECT},
        examples=[
            OpenApiExample('Feedback', value={'rating': 5, 'comment': 'Perfect ribeye.'}, request_only=True)
        ]
    )
    def post(self, request):
        serializer = FeedbackCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        branch = BranchService.get_branch(request.effective_branch_id)
        feedback = FeedbackService.submit(
            request.user,
            branch.id,
            rating=serializer.validated_data['rating'],
            comment=serializer.validated_data['comment'],
        )
        return Response(FeedbackSerializer(feedback).data, status=status.HTTP_201_CREATED)


@extend_schema(
    tags=['Feedback'],
    summary='Reply to feedback',
    request=FeedbackReplySerializer,
    responses={200: FeedbackSerializer, 400: OpenApiTypes.OBJECT, 403: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
)
@requires_roles(*MODERATOR_ROLES, category=ResourceCategory.FEEDBACK)
class FeedbackReplyView(FeedbackObjectMixin, APIView):
    """
    PATCH /v1/feedback/{id}/reply
    """
    permission_classes = [BranchScopedPermission]

    def patch(self, request, feedback_id):
        feedback = self.get_object(feedback_id)

        serializer = FeedbackReplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        feedback = FeedbackService.reply(
            feedback, serializer.validated_data['reply'], user=request.user, request=request
        )
        return Response(FeedbackSerializer(feedback).data, status=status.HTTP_200_OK)


@extend_schema(
    tags=['Feedback'],
    summary='Approve feedback',
    request=None,
    responses={200: FeedbackSerializer, 403: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
)
@requires_roles(*MODERATOR_ROLES, category=ResourceCategory.FEEDBACK)
class FeedbackApproveView(FeedbackObjectMixin, APIView):
    """
    PATCH /v1/feedback/{id}/approve
    """
    permission_classes = [BranchScopedPermission]

    def patch(self, request, feedback_id):
        feedback = self.get_object(feedback_id)
        feedback = FeedbackService.approve(feedback, user=request.user, request=request)
        return Response(FeedbackSerializer(feedback).data, status=status.HTTP_200_OK)


@extend_schema_view(
    delete=extend_schema(
        tags=['Feedback'],
        summary='Delete feedback',
        responses={204: None, 403: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
    )
)
@requires_roles(*MODERATOR_ROLES, category=ResourceCategory.FEEDBACK)
class FeedbackDetailView(FeedbackObjectMixin, APIView):
    """
    DELETE /v1/feedback/{id}
    """
    permission_classes = [BranchScopedPermission]

    def delete(self, request, feedback_id):
        feedback = self.get_object(feedback_id)
        FeedbackService.delete(feedback, user=request.user, request=request)
        return Response(status=status.HTTP_204_NO_CONTENT)
