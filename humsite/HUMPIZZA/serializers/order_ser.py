import json

from rest_framework import serializers

from ..models import MenuItem, Notification, Order, OrderItem, Reservation


class OrderItemSerializer(serializers.Serializer):
    """1 dòng trong giỏ hàng gửi lên"""
    menuItemId = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, default=1)
    customization = serializers.JSONField(required=False, allow_null=True)

    def validate_customization(self, value):
        if value in (None, {}):
            return None
        if not isinstance(value, dict) or 'schemaId' not in value:
            raise serializers.ValidationError("customization cần có schemaId và selections")
        value.setdefault('selections', {})
        return value


class OrderLineSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    menuItemId = serializers.IntegerField(source='menu_item_id', read_only=True)
    name = serializers.CharField(read_only=True)
    price = serializers.IntegerField(source='unit_price', read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    customization = serializers.JSONField(read_only=True)


class OrderSerializer(serializers.ModelSerializer):
    customerName = serializers.CharField(source='customer_name')
    customerEmail = serializers.EmailField(source='customer_email')
    customerPhone = serializers.CharField(source='customer_phone')
    customerAddress = serializers.CharField(source='customer_address', required=False, allow_blank=True)
    totalAmount = serializers.IntegerField(source='total_amount', read_only=True)
    orderType = serializers.ChoiceField(source='order_type', choices=Order.TYPE_CHOICES)
    paymentMethod = serializers.ChoiceField(source='payment_method', choices=Order.METHOD_CHOICES, default='cash')
    specialInstructions = serializers.CharField(source='special_instructions', required=False, allow_blank=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    status = serializers.CharField(read_only=True)
    lines = OrderLineSerializer(source='items', many=True, read_only=True)
    items = OrderItemSerializer(many=True, write_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'customerName', 'customerEmail', 'customerPhone', 'customerAddress',
            'totalAmount', 'status', 'orderType', 'paymentMethod', 'specialInstructions',
            'createdAt', 'lines', 'items',
        ]

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("Giỏ hàng trống")
        ids = {line['menuItemId'] for line in value}
        found = MenuItem.objects.filter(pk__in=ids, is_available=True).in_bulk()
        missing = sorted(ids - set(found))
        if missing:
            raise serializers.ValidationError(f"Không tìm thấy món ID={missing}")
        self._menu_items = found
        return value

    def validate(self, attrs):
        if attrs.get('order_type') == 'delivery' and not attrs.get('customer_address'):
            raise serializers.ValidationError({'customerAddress': 'Cần địa chỉ giao hàng'})
        return attrs

    def create(self, validated_data):
        lines = validated_data.pop('items')
        order = Order.objects.create(**validated_data)

        # Gộp các dòng trùng món + tùy chọn, giá luôn lấy từ menu
        merged = {}
        for line in lines:
            key = (line['menuItemId'], json.dumps(line.get('customization'), sort_keys=True))
            if key in merged:
                merged[key].quantity += line['quantity']
                continue
            item = self._menu_items[line['menuItemId']]
            merged[key] = OrderItem(
                order=order,
                menu_item=item,
                name=item.name,
                unit_price=item.price,
                quantity=line['quantity'],
                customization=line.get('customization'),
            )
        OrderItem.objects.bulk_create(merged.values())
        order.recalculate_total()
        return order


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)


class ReservationSerializer(serializers.ModelSerializer):
    specialRequests = serializers.CharField(source='special_requests', required=False, allow_blank=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    status = serializers.ChoiceField(choices=Reservation.STATUS_CHOICES, required=False)

    class Meta:
        model = Reservation
        fields = ['id', 'name', 'email', 'phone', 'date', 'time', 'guests', 'specialRequests', 'status', 'createdAt']

    def validate_guests(self, value):
        if value < 1:
            raise serializers.ValidationError("Số khách phải lớn hơn 0")
        return value


class ReservationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Reservation.STATUS_CHOICES)


class NotificationSerializer(serializers.ModelSerializer):
    titleVi = serializers.CharField(source='title_vi')
    contentVi = serializers.CharField(source='content_vi')
    customerName = serializers.CharField(source='customer_name')
    customerPhone = serializers.CharField(source='customer_phone')
    referenceId = serializers.CharField(source='reference_id')
    referenceType = serializers.CharField(source='reference_type')
    isRead = serializers.BooleanField(source='is_read')
    createdAt = serializers.DateTimeField(source='created_at')

    class Meta:
        model = Notification
        fields = [
            'id', 'type', 'title', 'titleVi', 'content', 'contentVi', 'customerName',
            'customerPhone', 'referenceId', 'referenceType', 'isRead', 'priority', 'createdAt',
        ]
