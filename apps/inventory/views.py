"""
Inventory REST API views.
"""
from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiExample
from drf_spectacular.types import OpenApiTypes

from apps.branches.services import BranchService
from apps.core.exceptions import ResourceNotFound
from apps.core.pagination import StandardResultsSetPagination
from apps.core.permissions import BranchScopedPermission, requires_roles
from apps.inventory.models import InventoryItem
from apps.inventory.serializers import (
    InventoryCreateSerializer, InventoryItemSerializer,
    InventoryUpdateSerializer, InventoryWithItemCreateSerializer,
)
from apps.inventory.services import InventoryService
from apps.rbac.models import AuditLog
from apps.rbac.roles import Role, ResourceCategory

BRANCH_PARAMETER = OpenApiParameter(
    name='branch_id',
    type=OpenApiTypes.INT,
    location=OpenApiParameter.QUERY,
    description='Branch to read. Honoured for the owner only; staff always see their home branch.',
)


@requires_roles(Role.ADMIN, Role.MANAGER, Role.STAFF, methods=['GET'])
@requires_roles(Role.ADMIN, Role.MANAGER, methods=['POST'])
class InventoryListView(APIView):
    """
    GET  /v1/inventory/
    POST /v1/inventory/
    """
    permission_classes = [BranchScopedPermission]
    resource_category = ResourceCategory.INVENTORY
    pagination_class = StandardResultsSetPagination

    @extend_schema(
        tags=['Inventory'],
        summary='List branch inventory',
        parameters=[
            BRANCH_PARAMETER,
            OpenApiParameter(
                name='low_stock',
                type=OpenApiTypes.BOOL,
                location=OpenApiParameter.QUERY,
                description='Only records below their minimum quantity',
            ),
        ],
        responses={200: InventoryItemSerializer(many=True)},
    )
    def get(self, request):
        queryset = InventoryItem.objects.for_branch(request.effective_branch_id).select_related('menu_item')
        if request.query_params.get('low_stock', '').lower() in ('1', 'true', 'yes'):
            queryset = queryset.low_stock()

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(queryset, request, view=self)
        serializer = InventoryItemSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    @extend_schema(
        tags=['Inventory'],
        summary='Track stock for a menu item',
        request=InventoryCreateSerializer,
        responses={201: InventoryItemSerializer, 400: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
        examples=[
            OpenApiExample('Create', value={'menu_item_id': 3, 'quantity': 20, 'min_quantity': 5}, request_only=True)
        ]
    )
    def post(self, request):
        serializer = InventoryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        branch = BranchService.get_branch(request.effective_branch_id)
        item = InventoryService.create_for_menu_item(
            branch.id,
            **serializer.validated_data
        )
        return Response(InventoryItemSerializer(item).data, status=status.HTTP_201_CREATED)


@extend_schema(
    tags=['Inventory'],
    summary='Create menu item with stock',
    request=InventoryWithItemCreateSerializer,
    responses={201: InventoryItemSerializer, 400: OpenApiTypes.OBJECT},
    examples=[
        OpenApiExample(
            'Create',
            value={'name': 'Sirloin', 'category': 'Steaks', 'price': '39.99', 'quantity': 30},
            request_only=True,
        )
    ]
)
@requires_roles(Role.ADMIN, Role.MANAGER, category=ResourceCategory.INVENTORY)
class InventoryWithItemCreateView(APIView):
    """
    POST /v1/inventory/with-item
    """
    permission_classes = [BranchScopedPermission]

    def post(self, request):
        serializer = InventoryWithItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        branch = BranchService.get_branch(request.effective_branch_id)
        item = InventoryService.create_with_menu_item(
            branch.id,
            **serializer.validated_data
        )
        return Response(InventoryItemSerializer(item).data, status=status.HTTP_201_CREATED)


@extend_schema(
    tags=['Inventory'],
    summary='Adjust stock',
    description='Set quantity and/or minimum quantity. Staff of other branches are refused.',
    request=InventoryUpdateSerializer,
    responses={200: InventoryItemSerializer, 403: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
)
@requires_roles(Role.ADMIN, Role.MANAGER, category=ResourceCategory.INVENTORY)
class InventoryDetailView(APIView):
    """
    PATCH /v1/inventory/{id}
    """
    permission_classes = [BranchScopedPermission]

    def get_object(self, pk):
        item = InventoryItem.objects.select_related('menu_item').filter(pk=pk).first()
        if item is None:
            raise ResourceNotFound('Inventory item not found.')
        self.check_object_permissions(self.request, item)
        return item

    def patch(self, request, pk):
        item = self.get_object(pk)

        serializer = InventoryUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        before = {'quantity': item.quantity, 'min_quantity': item.min_quantity}
        item = InventoryService.update_stock(item, **serializer.validated_data)

        AuditLog.log_action(
            action='inventory_updated',
            user=request.user,
            branch_id=item.branch_id,
            target_type='InventoryItem',
            target_id=item.id,
            diff={'before': before, 'after': {'quantity': item.quantity, 'min_quantity': item.min_quantity}},
            request=request,
        )
        return Response(InventoryItemSerializer(item).data, status=status.HTTP_200_OK)
