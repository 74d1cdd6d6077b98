"""
Reservation API views.
"""
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiExample
from drf_spectacular.types import OpenApiTypes

from apps.branches.services import BranchService
from apps.core.exceptions import ResourceNotFound
from apps.core.pagination import StandardResultsSetPagination
from apps.core.permissions import BranchScopedPermission, requires_roles
from apps.rbac.roles import Role, ResourceCategory
from apps.reservations.models import Reservation
from apps.reservations.serializers import (
    ReservationCreateSerializer, ReservationSerializer, ReservationStatusSerializer,
)
from apps.reservations.services import ReservationService


@requires_roles(Role.ADMIN, Role.MANAGER, Role.STAFF, Role.CUSTOMER, category=ResourceCategory.RESERVATIONS)
class ReservationListView(APIView):
    """
    GET  /v1/reservations/ - Bookings of the effective branch (customers: their own)
    POST /v1/reservations/ - Book a table in the effective branch
    """
    permission_classes = [BranchScopedPermission]
    pagination_class = StandardResultsSetPagination

    @extend_schema(
        tags=['Reservations'],
        summary='List reservations',
        parameters=[
            OpenApiParameter(
                name='branch_id',
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                description='Branch to read. Honoured for the owner only.'
            ),
            OpenApiParameter(
                name='status',
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                enum=[choice for choice, _ in Reservation.Status.choices]
            ),
        ],
        responses={200: ReservationSerializer(many=True)},
    )
    def get(self, request):
        queryset = Reservation.objects.for_branch(request.effective_branch_id).select_related('user')
        if request.actor.role == Role.CUSTOMER:
            queryset = queryset.for_user(request.user)

        status_filter = request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter.upper())

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(queryset, request, view=self)
        return paginator.get_paginated_response(ReservationSerializer(page, many=True).data)

    @extend_schema(
        tags=['Reservations'],
        summary='Create reservation',
        request=ReservationCreateSerializer,
        responses={201: ReservationSerializer, 400: OpenApiTypes.OBJECT},
        examples=[
            OpenApiExample(
                'Booking',
                value={'date': '2026-11-20', 'time': '19:30', 'guests': 4, 'notes': 'Window table'},
                request_only=True,
            )
        ]
    )
    def post(self, request):
        serializer = ReservationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        branch = BranchService.get_branch(request.effective_branch_id)
        reservation = ReservationService.create_reservation(
            request.user,
            branch.id,
            date=data['date'],
            time=data['time'],
            guests=data['guests'],
            notes=data['notes'],
        )
        return Response(ReservationSerializer(reservation).data, status=status.HTTP_201_CREATED)


@extend_schema(
    tags=['Reservations'],
    summary='Update reservation status',
    request=ReservationStatusSerializer,
    responses={200: ReservationSerializer, 400: OpenApiTypes.OBJECT, 403: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
)
@requires_roles(Role.ADMIN, Role.MANAGER, Role.STAFF, category=ResourceCategory.RESERVATIONS)
class ReservationStatusView(APIView):
    """
    PATCH /v1/reservations/{id}/status
    """
    permission_classes = [BranchScopedPermission]

    def get_object(self, reservation_id):
        reservation = Reservation.objects.filter(pk=reservation_id).first()
        if reservation is None:
            raise ResourceNotFound('Reservation not found.')
        self.check_object_permissions(self.request, reservation)
        return reservation

    def patch(self, request, reservation_id):
        reservation = self.get_object(reservation_id)

        serializer = ReservationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reservation = ReservationService.update_status(
            reservation,
            serializer.validated_data['status'],
            user=request.user,
            request=request,
        )
        return Response(ReservationSerializer(reservation).data, status=status.HTTP_200_OK)
