import logging

from django.db import transaction
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ..models import Notification, Order, Reservation
from ..permissions import IsBackOffice
from ..serializers import (
    NotificationSerializer, OrderSerializer, OrderStatusSerializer,
    ReservationSerializer, ReservationStatusSerializer,
)

logger = logging.getLogger(__name__)


def _notify(**fields):
    """Tạo thông báo cho dashboard admin/nhân viên"""
    return Notification.objects.create(**fields)


class PublicCreateMixin:
    """Khách gửi được (POST), còn lại chỉ admin/nhân viên"""

    def get_permissions(self):
        if self.action == 'create':
            return [AllowAny()]
        return [IsAuthenticated(), IsBackOffice()]


# ==========================================
# 1. ĐƠN HÀNG (từ giỏ hàng)
# ==========================================
class OrderViewSet(PublicCreateMixin, viewsets.ModelViewSet):
    queryset = Order.objects.prefetch_related('items')
    serializer_class = OrderSerializer
    http_method_names = ['get', 'post', 'patch', 'delete']

    def create(self, request, *args, **kwargs):
        serializer = OrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            order = serializer.save()
            _notify(
                type='order',
                title=f"New order #{order.id}",
                title_vi=f"Đơn hàng mới #{order.id}",
                content=f"{order.customer_name} placed an order ({order.get_order_type_display()})",
                content_vi=f"{order.customer_name} vừa đặt đơn {order.total_amount}đ",
                customer_name=order.customer_name,
                customer_phone=order.customer_phone,
                reference_id=str(order.id),
                reference_type='order',
                priority='high',
            )
        logger.info("Order %s created, total %s", order.id, order.total_amount)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        order = self.get_object()
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order.status = serializer.validated_data['status']
        order.save(update_fields=['status'])
        return Response(OrderSerializer(order).data)


# ==========================================
# 2. ĐẶT BÀN
# ==========================================
class ReservationViewSet(PublicCreateMixin, viewsets.ModelViewSet):
    queryset = Reservation.objects.all()
    serializer_class = ReservationSerializer
    http_method_names = ['get', 'post', 'patch', 'delete']

    def create(self, request, *args, **kwargs):
        serializer = ReservationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            booking = serializer.save(status='pending')
            _notify(
                type='reservation',
                title=f"New reservation from {booking.name}",
                title_vi=f"Yêu cầu đặt bàn từ {booking.name}",
                content=f"{booking.guests} guests on {booking.date} at {booking.time:%H:%M}",
                content_vi=f"{booking.guests} khách, ngày {booking.date:%d/%m/%Y} lúc {booking.time:%H:%M}",
                customer_name=booking.name,
                customer_phone=booking.phone,
                reference_id=str(booking.id),
                reference_type='reservation',
            )
        return Response(ReservationSerializer(booking).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        booking = self.get_object()
        serializer = ReservationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking.status = serializer.validated_data['status']
        booking.save(update_fields=['status'])
        return Response(ReservationSerializer(booking).data)


# ==========================================
# 3. THÔNG BÁO
# ==========================================
class NotificationViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Notification.objects.all()
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated, IsBackOffice]

    def get_queryset(self):
        qs = super().get_queryset()
        if self.request.query_params.get('unread') == 'true':
            qs = qs.filter(is_read=False)
        return qs

    @action(detail=False, methods=['get'], url_path='unread-count')
    def unread_count(self, request):
        return Response({'count': Notification.objects.filter(is_read=False).count()})

    @action(detail=True, methods=['patch'])
    def read(self, request, pk=None):
        notification = self.get_object()
        notification.is_read = True
        notification.save(update_fields=['is_read'])
        return Response(NotificationSerializer(notification).data)

    @action(detail=False, methods=['patch'], url_path='mark-all-read')
    def mark_all_read(self, request):
        updated = Notification.objects.filter(is_read=False).update(is_read=True)
        return Response({'success': True, 'updated': updated})


@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsBackOffice])
def clear_read_notifications(request):
    deleted, _ = Notification.objects.filter(is_read=True).delete()
    return Response({'success': True, 'deleted': deleted})
