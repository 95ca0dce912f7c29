import re

from django.utils.text import slugify
from rest_framework import serializers

from ..models import BlogPost, CustomerReview, HomeContent, PageSeo


def _camel(name):
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def _snake(name):
    return re.sub(r'(?<!^)(?=[A-Z])', '_', name).lower()


class CamelModelSerializer(serializers.ModelSerializer):
    """Model nhiều cột: nhận/trả JSON dạng camelCase (titleVi, metaTitle...)"""

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {_camel(k): v for k, v in data.items()}

    def to_internal_value(self, data):
        if hasattr(data, 'items'):
            data = {_snake(k): v for k, v in data.items()}
        return super().to_internal_value(data)


def generate_slug(text):
    return slugify(text or '')


# ==========================================
# 1. BLOG
# ==========================================
class BlogPostSerializer(CamelModelSerializer):
    class Meta:
        model = BlogPost
        exclude = ['pinned', 'pin_order']
        read_only_fields = ['created_at', 'updated_at']

    def validate(self, attrs):
        # Tự sinh slug nếu thiếu
        title = attrs.get('title') or (self.instance.title if self.instance else '')
        if title and not attrs.get('slug') and not (self.instance and self.instance.slug):
            attrs['slug'] = generate_slug(title)
        title_vi = attrs.get('title_vi') or (self.instance.title_vi if self.instance else '')
        if title_vi and not attrs.get('slug_vi') and not (self.instance and self.instance.slug_vi):
            attrs['slug_vi'] = generate_slug(title_vi)
        return attrs

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['pinned'] = instance.pinned
        data['pinOrder'] = instance.pin_order
        return data


# ==========================================
# 2. REVIEWS
# ==========================================
class CustomerReviewSerializer(CamelModelSerializer):
    class Meta:
        model = CustomerReview
        exclude = ['is_pinned', 'pinned_at']
        read_only_fields = ['created_at', 'updated_at']

    def validate_rating(self, value):
        if not 1 <= value <= 5:
            raise serializers.ValidationError("Rating phải từ 1 đến 5")
        return value

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['isPinned'] = instance.is_pinned
        data['pinnedAt'] = instance.pinned_at.isoformat() if instance.pinned_at else None
        return data


# ==========================================
# 3. SEO
# ==========================================
class PageSeoSerializer(CamelModelSerializer):
    language = serializers.ChoiceField(choices=['en', 'vi'])

    class Meta:
        model = PageSeo
        fields = [
            'id', 'page_key', 'language', 'meta_title', 'meta_description', 'keywords',
            'canonical_url', 'og_title', 'og_description', 'og_image_url', 'og_type',
            'og_url', 'no_index', 'updated_at',
        ]
        read_only_fields = ['updated_at']
        # upsert theo (page_key, language) nên bỏ validator unique mặc định
        validators = []


# ==========================================
# 4. HOME CONTENT + VIDEO
# ==========================================
class HomeContentSerializer(CamelModelSerializer):
    class Meta:
        model = HomeContent
        exclude = ['id']
        read_only_fields = ['pending_hero_video_url', 'pending_reservation_video_url', 'updated_at']


class SaveVideoSerializer(serializers.Serializer):
    videoUrl = serializers.CharField(max_length=500)
    videoType = serializers.ChoiceField(choices=list(HomeContent.VIDEO_SLOTS))
