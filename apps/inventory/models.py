"""
Menu and stock models.

Implements per-branch menus and stock levels:
- MenuItem: a dish sold by one branch
- InventoryItem: stock on hand of a menu item at a branch
"""
from django.core.validators import MinValueValidator
from django.db import models
from apps.core.models import BranchOwnedModel, BranchScopedQuerySet

DEFAULT_MIN_QUANTITY = 10


class MenuItem(BranchOwnedModel):
    """
    A dish on a branch's menu.
    """

    name = models.CharField(max_length=255, help_text="Dish name")
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Unit price"
    )
    category = models.CharField(
        max_length=100,
        default='Other',
        db_index=True,
        help_text="Menu section, e.g. 'Steaks'"
    )

    class Meta:
        db_table = 'menu_items'
        ordering = ['category', 'name']
        indexes = [
            models.Index(fields=['branch', 'category'], name='menu_branch_category_idx'),
        ]

    def __str__(self):
        return self.name


class InventoryItemQuerySet(BranchScopedQuerySet):

    def low_stock(self):
        """Records whose quantity has dropped below their minimum."""
        return self.filter(quantity__lt=models.F('min_quantity'))


class InventoryItem(BranchOwnedModel):
    """
    Stock level of one menu item at one branch.
    """

    menu_item = models.ForeignKey(
        MenuItem,
        on_delete=models.CASCADE,
        related_name='inventory_items',
        help_text="Menu item this stock belongs to"
    )
    quantity = models.PositiveIntegerField(
        default=0,
        help_text="Units on hand"
    )
    min_quantity = models.PositiveIntegerField(
        default=DEFAULT_MIN_QUANTITY,
        help_text="Low-stock threshold"
    )

    objects = InventoryItemQuerySet.as_manager()

    class Meta:
        db_table = 'inventory_items'
        ordering = ['menu_item__name']
        constraints = [
            models.UniqueConstraint(fields=['menu_item', 'branch'], name='unique_menu_item_per_branch'),
        ]

    def __str__(self):
        return f"{self.menu_item.name} @ {self.branch_id}: {self.quantity}"

    @property
    def is_low_stock(self):
        return self.quantity < self.min_quantity
