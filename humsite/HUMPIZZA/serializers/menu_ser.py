import base64
import os
import uuid
from urllib.parse import urlparse

import requests
from django.core.files.base import ContentFile
from rest_framework import serializers

from ..models import Category, CustomizationSchema, MenuItem


# ==========================================
# 0. HELPER: nhận ảnh từ file / base64 / link
# ==========================================
class FlexibleImageField(serializers.ImageField):
    """
    Field này giúp Django hiểu được ảnh dù gửi dưới dạng:
    1. File upload truyền thống.
    2. Chuỗi Base64 (data:image/...;base64,...) từ trang quản trị.
    3. Link online (http://...).
    """
    def to_internal_value(self, data):
        if isinstance(data, str) and data.startswith('http'):
            try:
                response = requests.get(data, timeout=10)
            except requests.RequestException as e:
                raise serializers.ValidationError(f"Lỗi tải ảnh: {e}")
            if response.status_code != 200:
                raise serializers.ValidationError(f"Lỗi tải ảnh từ link: {response.status_code}")
            file_name = os.path.basename(urlparse(data).path) or f"{uuid.uuid4()}.jpg"
            data = ContentFile(response.content, name=file_name)

        elif isinstance(data, str) and data.startswith('data:') and ';base64,' in data:
            header, img_str = data.split(';base64,', 1)
            try:
                decoded_file = base64.b64decode(img_str)
            except (TypeError, ValueError):
                self.fail('invalid_image')
            file_extension = header.split('/')[-1] if '/' in header else 'jpg'
            data = ContentFile(decoded_file, name=f"{uuid.uuid4()}.{file_extension}")

        return super().to_internal_value(data)


# ==========================================
# 1. CATEGORY & CUSTOMIZATION
# ==========================================
class CategorySerializer(serializers.ModelSerializer):
    nameVi = serializers.CharField(source='name_vi', required=False, allow_blank=True)
    sortOrder = serializers.IntegerField(source='sort_order', required=False)

    class Meta:
        model = Category
        fields = ['id', 'name', 'nameVi', 'description', 'sortOrder']


class CustomizationSchemaSerializer(serializers.ModelSerializer):
    nameVi = serializers.CharField(source='name_vi', required=False, allow_blank=True)
    descriptionVi = serializers.CharField(source='description_vi', required=False, allow_blank=True)
    isActive = serializers.BooleanField(source='is_active', required=False)

    class Meta:
        model = CustomizationSchema
        fields = ['id', 'name', 'nameVi', 'type', 'description', 'descriptionVi', 'options', 'isActive']


# ==========================================
# 2. MENU ITEM
# ==========================================
class MenuItemSerializer(serializers.ModelSerializer):
    """Serializer để XEM"""
    nameVi = serializers.CharField(source='name_vi')
    descriptionVi = serializers.CharField(source='description_vi')
    vatRate = serializers.IntegerField(source='vat_rate')
    categoryId = serializers.IntegerField(source='category_id')
    categoryName = serializers.SerializerMethodField()
    imageUrl = serializers.SerializerMethodField()
    isAvailable = serializers.BooleanField(source='is_available')
    isPinned = serializers.BooleanField(source='is_pinned')
    pinnedAt = serializers.DateTimeField(source='pinned_at')

    class Meta:
        model = MenuItem
        fields = [
            'id', 'name', 'nameVi', 'description', 'descriptionVi', 'price', 'vatRate',
            'categoryId', 'categoryName', 'imageUrl', 'isAvailable', 'isPinned', 'pinnedAt',
        ]

    def get_categoryName(self, obj):
        return obj.category.name if obj.category else "Khác"

    def get_imageUrl(self, obj):
        if obj.image:
            req = self.context.get('request')
            return req.build_absolute_uri(obj.image.url) if req else obj.image.url
        return obj.image_url or ''


class MenuItemFormSerializer(serializers.ModelSerializer):
    """Serializer để THÊM/SỬA (ảnh qua FlexibleImageField)"""
    nameVi = serializers.CharField(source='name_vi', required=False, allow_blank=True)
    descriptionVi = serializers.CharField(source='description_vi', required=False, allow_blank=True)
    vatRate = serializers.IntegerField(source='vat_rate', required=False, min_value=0, max_value=100)
    categoryId = serializers.PrimaryKeyRelatedField(
        source='category', queryset=Category.objects.all(), required=False, allow_null=True
    )
    imageUrl = serializers.CharField(source='image_url', required=False, allow_blank=True)
    isAvailable = serializers.BooleanField(source='is_available', required=False)
    image = FlexibleImageField(required=False, allow_null=True)

    class Meta:
        model = MenuItem
        fields = [
            'id', 'name', 'nameVi', 'description', 'descriptionVi', 'price', 'vatRate',
            'categoryId', 'imageUrl', 'isAvailable', 'image',
        ]

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Giá không được âm")
        return value


class SchemaIdsSerializer(serializers.Serializer):
    schemaIds = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=True)

    def validate_schemaIds(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError("Duplicate schemaIds are not allowed")
        found = set(CustomizationSchema.objects.filter(pk__in=value).values_list('pk', flat=True))
        missing = [pk for pk in value if pk not in found]
        if missing:
            raise serializers.ValidationError(f"invalid schema id(s): {missing}")
        return value
