"""
Order models for restaurant order handling.

Implements kitchen order tracking with:
- Branch-scoped orders
- Line items priced at order time
- Kitchen status transitions
"""
from django.conf import settings
from django.db import models
from apps.core.models import BaseModel, BranchOwnedModel, BranchScopedQuerySet


class OrderQuerySet(BranchScopedQuerySet):
    """QuerySet for order queries with branch scoping."""

    def by_status(self, status):
        return self.filter(status=status)

    def open(self):
        """Orders the kitchen still has to deal with."""
        return self.filter(status__in=[Order.Status.PENDING, Order.Status.PREPARING, Order.Status.READY])


class Order(BranchOwnedModel):
    """
    An order placed at a branch.

    Each order:
    - Belongs to exactly one branch and the user who placed it
    - Contains line items with the unit price charged
    - Moves through kitchen statuses
    """

    class Status(models.TextChoices):
        PENDING = 'PENDING', 'Pending'
        PREPARING = 'PREPARING', 'Preparing'
        READY = 'READY', 'Ready'
        COMPLETED = 'COMPLETED', 'Completed'
        CANCELLED = 'CANCELLED', 'Cancelled'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='orders',
        help_text="User who placed the order"
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
        help_text="Order status"
    )
    total = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=0,
        help_text="Total order amount (sum of line totals)"
    )

    objects = OrderQuerySet.as_manager()

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['branch', 'status', 'created_at'], name='orders_branch_status_idx'),
            models.Index(fields=['branch', 'user'], name='orders_branch_user_idx'),
        ]

    def __str__(self):
        return f"Order {self.id} - {self.user_id} ({self.status})"

    @property
    def item_count(self):
        """Get total number of units in order."""
        return sum(item.quantity for item in self.items.all())


class OrderItem(BaseModel):
    """
    One line of an order: a menu item, how many, and the unit price charged.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items',
    )
    menu_item = models.ForeignKey(
        'inventory.MenuItem',
        on_delete=models.PROTECT,
        related_name='order_items',
    )
    quantity = models.PositiveIntegerField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="Unit price at the time of the order"
    )

    class Meta:
        db_table = 'order_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} x {self.menu_item_id}"

    @property
    def line_total(self):
        return self.price * self.quantity
