"""
Inventory serializers.
"""
from rest_framework import serializers
from apps.inventory.models import DEFAULT_MIN_QUANTITY, InventoryItem, MenuItem


class MenuItemSerializer(serializers.ModelSerializer):
    branch_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = MenuItem
        fields = ['id', 'branch_id', 'name', 'description', 'price', 'category']
        read_only_fields = fields


class InventoryItemSerializer(serializers.ModelSerializer):
    """Stock record with its menu item. The owning branch is read-only."""

    branch_id = serializers.IntegerField(read_only=True)
    menu_item = MenuItemSerializer(read_only=True)
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = InventoryItem
        fields = [
            'id', 'branch_id', 'menu_item', 'quantity', 'min_quantity',
            'is_low_stock', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class InventoryCreateSerializer(serializers.Serializer):
    """Track stock for an existing menu item."""

    menu_item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(required=False, default=0)
    min_quantity = serializers.IntegerField(required=False, default=DEFAULT_MIN_QUANTITY)


class InventoryWithItemCreateSerializer(serializers.Serializer):
    """Create a menu item and its stock record together."""

    name = serializers.CharField(max_length=255)
    category = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    description = serializers.CharField(required=False, allow_blank=True, default='')
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)
    quantity = serializers.IntegerField(required=False, default=0)
    min_quantity = serializers.IntegerField(required=False, default=DEFAULT_MIN_QUANTITY)

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Item name is required.")
        return value.strip()


class InventoryUpdateSerializer(serializers.Serializer):
    """Stock adjustment. At least one field is required."""

    quantity = serializers.IntegerField(min_value=0, required=False)
    min_quantity = serializers.IntegerField(min_value=0, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide quantity or min_quantity.")
        return attrs
