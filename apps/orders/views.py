"""
Order API views.
"""
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiExample
from drf_spectacular.types import OpenApiTypes
import logging

from apps.branches.services import BranchService
from apps.core.exceptions import ResourceNotFound
from apps.core.pagination import StandardResultsSetPagination
from apps.core.permissions import BranchScopedPermission, requires_roles
from apps.orders.models import Order
from apps.orders.serializers import OrderCreateSerializer, OrderSerializer, OrderStatusSerializer
from apps.orders.services import OrderService
from apps.rbac.roles import ALL_ROLES, Role, ResourceCategory

logger = logging.getLogger(__name__)


class OrderListView(APIView):
    """
    List and create orders.

    GET /v1/orders/ - List the effective branch's orders (customers: their own)
    POST /v1/orders/ - Place an order in the effective branch
    """
    permission_classes = [BranchScopedPermission]
    allowed_roles = ALL_ROLES
    resource_category = ResourceCategory.ORDERS
    pagination_class = StandardResultsSetPagination

    @extend_schema(
        tags=['Orders'],
        summary="List orders",
        description="Paginated orders of the effective branch, newest first",
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
                description='Filter by order status',
                enum=[choice for choice, _ in Order.Status.choices]
            ),
        ],
        responses={200: OrderSerializer(many=True)}
    )
    def get(self, request):
        queryset = (
            Order.objects.for_branch(request.effective_branch_id)
            .select_related('user')
            .prefetch_related('items__menu_item')
        )
        if request.actor.role == Role.CUSTOMER:
            queryset = queryset.for_user(request.user)

        status_filter = request.query_params.get('status')
        if status_filter:
            queryset = queryset.by_status(status_filter.upper())

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(queryset, request, view=self)
        serializer = OrderSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    @extend_schema(
        tags=['Orders'],
        summary="Place order",
        description="Create an order and decrement branch inventory atomically",
        request=OrderCreateSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiTypes.OBJECT,
            404: OpenApiTypes.OBJECT,
        },
        examples=[
            OpenApiExample(
                'Order',
                value={'items': [{'menu_item_id': 1, 'quantity': 2}]},
                request_only=True,
            )
        ]
    )
    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        branch = BranchService.get_branch(request.effective_branch_id)
        order = OrderService.create_order(
            request.user,
            branch.id,
            serializer.validated_data['items'],
            request=request,
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


@requires_roles(Role.ADMIN, Role.MANAGER, Role.CHEF, category=ResourceCategory.ORDERS)
class OrderStatusView(APIView):
    """
    PATCH /v1/orders/{id}/status

    Move an order through the kitchen. The order's owning branch is
    checked even though the route names no branch.
    """
    permission_classes = [BranchScopedPermission]

    def get_object(self, order_id):
        order = Order.objects.filter(pk=order_id).first()
        if order is None:
            raise ResourceNotFound('Order not found.')
        self.check_object_permissions(self.request, order)
        return order

    @extend_schema(
        tags=['Orders'],
        summary="Update order status",
        request=OrderStatusSerializer,
        responses={200: OrderSerializer, 400: OpenApiTypes.OBJECT, 403: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
        examples=[OpenApiExample('Preparing', value={'status': 'PREPARING'}, request_only=True)]
    )
    def patch(self, request, order_id):
        order = self.get_object(order_id)

        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.update_status(
            order,
            serializer.validated_data['status'],
            user=request.user,
            request=request,
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)
