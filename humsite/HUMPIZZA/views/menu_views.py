import logging

from django.db import transaction
from django.db.models import Q
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..exceptions import PinLimitReached
from ..models import MAX_PINNED, Category, CustomizationSchema, MenuItem, MenuItemSchema
from ..permissions import IsAdminRole, ReadOnlyOrBackOffice
from ..serializers import (
    CategorySerializer, CustomizationSchemaSerializer, MenuItemFormSerializer,
    MenuItemSerializer, SchemaIdsSerializer,
)

logger = logging.getLogger(__name__)

PIN_LIMIT_MESSAGE = f"Chỉ có thể ghim tối đa {MAX_PINNED} món ăn. Vui lòng bỏ ghim một món khác trước."


# ==========================================
# 1. DANH MỤC & TÙY CHỌN MÓN
# ==========================================
class CategoryViewSet(viewsets.ModelViewSet):
    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    permission_classes = [ReadOnlyOrBackOffice]


class CustomizationSchemaViewSet(viewsets.ModelViewSet):
    serializer_class = CustomizationSchemaSerializer
    permission_classes = [ReadOnlyOrBackOffice]

    def get_queryset(self):
        qs = CustomizationSchema.objects.all().order_by('id')
        if self.request.query_params.get('active') == 'true':
            qs = qs.filter(is_active=True)
        return qs


# ==========================================
# 2. MÓN ĂN
# ==========================================
class MenuItemViewSet(viewsets.ModelViewSet):
    """
    Khách: xem danh sách / chi tiết / tìm kiếm / món ghim.
    Admin + nhân viên: thêm, sửa, xóa. Chỉ admin được ghim món.
    """
    permission_classes = [ReadOnlyOrBackOffice]

    def get_queryset(self):
        qs = MenuItem.objects.select_related('category')
        if self.action != 'list':
            return qs
        params = self.request.query_params
        if params.get('includeUnavailable') != 'true':
            qs = qs.filter(is_available=True)
        if params.get('categoryId'):
            qs = qs.filter(category_id=params['categoryId'])
        return qs

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return MenuItemFormSerializer
        return MenuItemSerializer

    def _render(self, item, code=status.HTTP_200_OK):
        return Response(MenuItemSerializer(item, context={'request': self.request}).data, status=code)

    def create(self, request, *args, **kwargs):
        serializer = MenuItemFormSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = serializer.save()
        logger.info("Menu item %s created", item.pk)
        return self._render(item, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        item = self.get_object()
        serializer = MenuItemFormSerializer(item, data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        return self._render(serializer.save())

    @action(detail=False, methods=['get'])
    def pinned(self, request):
        qs = MenuItem.objects.select_related('category').filter(is_pinned=True).order_by('-pinned_at')
        return Response(MenuItemSerializer(qs, many=True, context={'request': request}).data)

    @action(detail=False, methods=['get'])
    def search(self, request):
        q = (request.query_params.get('q') or '').strip()
        if not q:
            return Response({'message': 'Search query is required'}, status=status.HTTP_400_BAD_REQUEST)
        qs = MenuItem.objects.select_related('category').filter(is_available=True).filter(
            Q(name__icontains=q) | Q(name_vi__icontains=q)
            | Q(description__icontains=q) | Q(description_vi__icontains=q)
        )
        return Response(MenuItemSerializer(qs, many=True, context={'request': request}).data)

    @action(detail=True, methods=['patch'], permission_classes=[IsAuthenticated, IsAdminRole])
    def pin(self, request, pk=None):
        item = self.get_object()
        if not item.is_pinned and MenuItem.objects.filter(is_pinned=True).count() >= MAX_PINNED:
            logger.info("Pin limit reached, item %s not pinned", item.pk)
            raise PinLimitReached(PIN_LIMIT_MESSAGE)
        return self._render(item.toggle_pin())

    @action(detail=True, methods=['get', 'patch'], url_path='customization-schemas')
    def customization_schemas(self, request, pk=None):
        item = self.get_object()

        if request.method == 'PATCH':
            serializer = SchemaIdsSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            with transaction.atomic():
                # Gắn lại theo đúng thứ tự gửi lên
                item.schema_links.all().delete()
                MenuItemSchema.objects.bulk_create([
                    MenuItemSchema(menu_item=item, schema_id=schema_id, sort_order=index)
                    for index, schema_id in enumerate(serializer.validated_data['schemaIds'])
                ])

        schemas = [link.schema for link in item.schema_links.select_related('schema')]
        return Response(CustomizationSchemaSerializer(schemas, many=True).data)
