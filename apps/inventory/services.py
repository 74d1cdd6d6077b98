"""
Inventory services: stock creation, updates and order decrements.
"""
import logging
from decimal import Decimal
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from apps.core.exceptions import InsufficientInventory, ResourceNotFound
from apps.inventory.models import DEFAULT_MIN_QUANTITY, InventoryItem, MenuItem

logger = logging.getLogger(__name__)


class InventoryService:
    """
    Stock management for one branch at a time.

    Callers pass the effective branch already resolved by the guard
    pipeline; nothing here decides which branch an actor may touch.
    """

    @classmethod
    @transaction.atomic
    def create_for_menu_item(cls, branch_id, menu_item_id, quantity=0,
                             min_quantity=DEFAULT_MIN_QUANTITY) -> InventoryItem:
        """
        Start tracking stock for an existing menu item of the branch.

        Raises:
            ResourceNotFound: the menu item does not exist in this branch
            ValidationError: the branch already tracks this menu item
        """
        menu_item = MenuItem.objects.for_branch(branch_id).filter(pk=menu_item_id).first()
        if menu_item is None:
            raise ResourceNotFound('Menu item not found.')

        if InventoryItem.objects.for_branch(branch_id).filter(menu_item=menu_item).exists():
            raise ValidationError(
                {'menu_item_id': ['Inventory already exists for this menu item at this branch.']}
            )

        try:
            with transaction.atomic():
                item = InventoryItem.objects.create(
                    branch_id=branch_id,
                    menu_item=menu_item,
                    quantity=max(0, quantity),
                    min_quantity=max(0, min_quantity),
                )
        except IntegrityError:
            raise ValidationError(
                {'menu_item_id': ['Inventory already exists for this menu item at this branch.']}
            )

        logger.info(
            "Inventory item created",
            extra={'inventory_item_id': item.id, 'menu_item_id': menu_item.id, 'branch_id': branch_id}
        )
        return item

    @classmethod
    @transaction.atomic
    def create_with_menu_item(cls, branch_id, name, category='', description='', price=None,
                              quantity=0, min_quantity=DEFAULT_MIN_QUANTITY) -> InventoryItem:
        """
        Create a menu item and its stock record in one step.
        """
        name = name.strip()
        description = (description or '').strip() or f"{name} inventory item"

        menu_item = MenuItem.objects.create(
            branch_id=branch_id,
            name=name,
            category=(category or '').strip() or 'Other',
            description=description,
            price=price if price is not None else Decimal('0.00'),
        )
        item = InventoryItem.objects.create(
            branch_id=branch_id,
            menu_item=menu_item,
            quantity=max(0, quantity),
            min_quantity=max(0, min_quantity),
        )

        logger.info(
            "Menu item and inventory created",
            extra={'inventory_item_id': item.id, 'menu_item_id': menu_item.id, 'branch_id': branch_id}
        )
        return item

    @classmethod
    def update_stock(cls, item: InventoryItem, quantity=None, min_quantity=None) -> InventoryItem:
        """Set the quantity and/or threshold of a stock record."""
        update_fields = ['updated_at']
        if quantity is not None:
            item.quantity = quantity
            update_fields.append('quantity')
        if min_quantity is not None:
            item.min_quantity = min_quantity
            update_fields.append('min_quantity')
        item.save(update_fields=update_fields)
        return item

    @classmethod
    def decrement(cls, branch_id, menu_item_id, quantity) -> InventoryItem:
        """
        Take ``quantity`` units of a menu item out of the branch's stock.

        Must run inside the caller's transaction so that a failure on a
        later line of an order rolls back earlier decrements.

        Raises:
            InsufficientInventory: no stock record, or not enough units
        """
        item = (
            InventoryItem.objects.select_for_update()
            .for_branch(branch_id)
            .filter(menu_item_id=menu_item_id)
            .first()
        )
        if item is None or item.quantity < quantity:
            raise InsufficientInventory(f'Insufficient inventory for item {menu_item_id}.')

        item.quantity -= quantity
        item.save(update_fields=['quantity', 'updated_at'])
        return item
