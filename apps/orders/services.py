"""
Order services: placing orders and moving them through the kitchen.
"""
import logging
from decimal import Decimal
from django.db import transaction

from apps.core.exceptions import ResourceNotFound
from apps.inventory.models import MenuItem
from apps.inventory.services import InventoryService
from apps.orders.models import Order, OrderItem
from apps.rbac.models import AuditLog

logger = logging.getLogger(__name__)


class OrderService:

    @classmethod
    @transaction.atomic
    def create_order(cls, user, branch_id, items, request=None) -> Order:
        """
        Place an order in a branch and take its lines out of stock.

        The order, its lines and every stock decrement commit together or
        not at all.

        Args:
            user: user placing the order
            branch_id: effective branch resolved by the guard pipeline
            items: list of {'menu_item_id', 'quantity'}

        Raises:
            ResourceNotFound: a menu item is not on this branch's menu
            InsufficientInventory: a line exceeds the stock on hand
        """
        menu_ids = [line['menu_item_id'] for line in items]
        menu = MenuItem.objects.for_branch(branch_id).in_bulk(menu_ids)
        missing = [menu_id for menu_id in menu_ids if menu_id not in menu]
        if missing:
            raise ResourceNotFound(f'Menu item {missing[0]} not found in this branch.')

        order = Order.objects.create(user=user, branch_id=branch_id, total=Decimal('0.00'))

        total = Decimal('0.00')
        for line in items:
            menu_item = menu[line['menu_item_id']]
            OrderItem.objects.create(
                order=order,
                menu_item=menu_item,
                quantity=line['quantity'],
                price=menu_item.price,
            )
            InventoryService.decrement(branch_id, menu_item.id, line['quantity'])
            total += menu_item.price * line['quantity']

        order.total = total
        order.save(update_fields=['total', 'updated_at'])

        AuditLog.log_action(
            action='order_created',
            user=user,
            branch_id=branch_id,
            target_type='Order',
            target_id=order.id,
            metadata={'lines': len(items), 'total': str(total)},
            request=request,
        )
        logger.info(
            "Order created",
            extra={'order_id': order.id, 'branch_id': branch_id, 'user_id': user.id, 'total': str(total)}
        )
        return order

    @classmethod
    def update_status(cls, order: Order, status, user=None, request=None) -> Order:
        previous = order.status
        order.status = status
        order.save(update_fields=['status', 'updated_at'])

        AuditLog.log_action(
            action='order_status_changed',
            user=user,
            branch_id=order.branch_id,
            target_type='Order',
            target_id=order.id,
            diff={'before': {'status': previous}, 'after': {'status': status}},
            request=request,
        )
        logger.info(
            "Order status changed",
            extra={'order_id': order.id, 'branch_id': order.branch_id, 'from': previous, 'to': status}
        )
        return order
