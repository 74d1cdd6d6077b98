"""
Serializers for order API endpoints.
"""
from rest_framework import serializers
from apps.orders.models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    """Order line with the menu item name for display."""

    menu_item_id = serializers.IntegerField(read_only=True)
    menu_item_name = serializers.CharField(source='menu_item.name', read_only=True)

    class Meta:
        model = OrderItem
        fields = ['id', 'menu_item_id', 'menu_item_name', 'quantity', 'price']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Order with its lines. Branch and owner are read-only."""

    branch_id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    user_email = serializers.CharField(source='user.email', read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'branch_id', 'user_id', 'user_email', 'status', 'total',
            'items', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class OrderLineInputSerializer(serializers.Serializer):
    menu_item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class OrderCreateSerializer(serializers.Serializer):
    """
    Serializer for placing an order.

    Prices come from the branch menu; a client-sent price or total is ignored.
    """

    items = OrderLineInputSerializer(many=True, allow_empty=False)
    branch_id = serializers.IntegerField(required=False, allow_null=True)

    def validate_items(self, value):
        seen = set()
        for line in value:
            if line['menu_item_id'] in seen:
                raise serializers.ValidationError("Each menu item may appear only once per order.")
            seen.add(line['menu_item_id'])
        return value


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.Status.choices)
