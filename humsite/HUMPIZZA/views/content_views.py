import logging

from django.db import transaction
from django.db.models import Q
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ..exceptions import PinLimitReached, UploadRejected
from ..models import MAX_PINNED, BlogPost, CustomerReview, HomeContent, PageSeo, get_role
from ..permissions import IsAdminRole, IsBackOffice, ReadOnlyOrAdmin, ReadOnlyOrBackOffice
from ..serializers import BlogPostSerializer, CustomerReviewSerializer, HomeContentSerializer, PageSeoSerializer
from ..uploads import activate_staged, discard_staged, stage_videos, video_status

logger = logging.getLogger(__name__)

STATIC_PAGES = ['', 'menu', 'about', 'blog', 'contact', 'booking']


def _is_back_office(request):
    return get_role(request.user) in ('admin', 'staff')


# ==========================================
# 1. TIN TỨC
# ==========================================
class BlogPostViewSet(viewsets.ModelViewSet):
    serializer_class = BlogPostSerializer
    permission_classes = [ReadOnlyOrBackOffice]

    def get_queryset(self):
        qs = BlogPost.objects.all()
        if not _is_back_office(self.request):
            return qs.filter(published=True)
        params = self.request.query_params
        if params.get('all') == 'true':
            return qs
        if params.get('published') == 'false':
            return qs.filter(published=False)
        if self.action == 'list':
            return qs.filter(published=True)
        return qs

    @action(detail=False, methods=['get'], url_path=r'slug/(?P<slug>[-\w]+)')
    def by_slug(self, request, slug=None):
        post = get_object_or_404(BlogPost, Q(slug=slug) | Q(slug_vi=slug), published=True)
        return Response(BlogPostSerializer(post).data)

    @action(detail=False, methods=['get'])
    def pinned(self, request):
        qs = BlogPost.objects.filter(pinned=True, published=True).order_by('pin_order')
        return Response(BlogPostSerializer(qs, many=True).data)

    @action(detail=True, methods=['patch'])
    def pin(self, request, pk=None):
        post = self.get_object()
        if post.pinned:
            post.pinned, post.pin_order = False, None
        else:
            used = set(BlogPost.objects.filter(pinned=True).values_list('pin_order', flat=True))
            free = [slot for slot in range(1, MAX_PINNED + 1) if slot not in used]
            if not free:
                raise PinLimitReached(f"Chỉ có thể ghim tối đa {MAX_PINNED} bài viết.")
            post.pinned, post.pin_order = True, free[0]
        post.save(update_fields=['pinned', 'pin_order', 'updated_at'])
        return Response(BlogPostSerializer(post).data)


# ==========================================
# 2. ĐÁNH GIÁ KHÁCH HÀNG
# ==========================================
class CustomerReviewViewSet(viewsets.ModelViewSet):
    queryset = CustomerReview.objects.all()
    serializer_class = CustomerReviewSerializer

    def get_permissions(self):
        if self.action == 'published':
            return [AllowAny()]
        return [IsAuthenticated(), IsBackOffice()]

    @action(detail=False, methods=['get'])
    def published(self, request):
        qs = CustomerReview.objects.filter(is_published=True).order_by('-is_pinned', '-pinned_at', 'display_order')
        return Response(CustomerReviewSerializer(qs, many=True).data)

    @action(detail=True, methods=['patch'])
    def pin(self, request, pk=None):
        review = self.get_object()
        if not review.is_pinned and CustomerReview.objects.filter(is_pinned=True).count() >= MAX_PINNED:
            raise PinLimitReached(f"Chỉ có thể ghim tối đa {MAX_PINNED} đánh giá.")
        review.is_pinned = not review.is_pinned
        review.pinned_at = timezone.now() if review.is_pinned else None
        review.save(update_fields=['is_pinned', 'pinned_at', 'updated_at'])
        return Response(CustomerReviewSerializer(review).data)


# ==========================================
# 3. SEO
# ==========================================
@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, IsAdminRole])
def seo_pages(request):
    if request.method == 'GET':
        return Response(PageSeoSerializer(PageSeo.objects.all(), many=True).data)

    # Upsert theo (pageKey, language)
    serializer = PageSeoSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    page, created = PageSeo.objects.update_or_create(
        page_key=data.pop('page_key'), language=data.pop('language'), defaults=data,
    )
    code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return Response(PageSeoSerializer(page).data, status=code)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([ReadOnlyOrAdmin])
def seo_page_detail(request, page_key, language):
    if request.method == 'GET':
        page = PageSeo.objects.filter(page_key=page_key, language=language).first()
        if page is None and language != 'en':
            page = PageSeo.objects.filter(page_key=page_key, language='en').first()
        if page is None:
            return Response({'message': 'SEO data not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(PageSeoSerializer(page).data)

    page = get_object_or_404(PageSeo, page_key=page_key, language=language)
    if request.method == 'DELETE':
        page.delete()
        return Response({'success': True})

    serializer = PageSeoSerializer(page, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response(serializer.data)


# ==========================================
# 4. NỘI DUNG TRANG CHỦ + VIDEO HERO
# ==========================================
@api_view(['GET', 'PUT'])
@permission_classes([ReadOnlyOrAdmin])
def home_content(request):
    content = HomeContent.load()
    if request.method == 'GET':
        return Response(HomeContentSerializer(content).data)

    serializer = HomeContentSerializer(content, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)

    pending = {}
    if request.data.get('commitPendingVideos'):
        pending = {
            video_type: content.get_pending(video_type)
            for video_type in HomeContent.VIDEO_SLOTS
            if content.get_pending(video_type)
        }

    # Chuẩn bị đủ file tạm cho mọi slot trước, lỗi 1 slot thì không đổi gì cả
    try:
        staged = stage_videos(pending)
    except UploadRejected as e:
        logger.error("Commit pending videos failed: %s", e.message)
        return Response({'message': e.message}, status=e.status_code)

    try:
        with transaction.atomic():
            content = serializer.save()
            for video_type in staged:
                content.set_pending(video_type, None)
            activate_staged(staged)
    finally:
        discard_staged(staged)

    return Response(HomeContentSerializer(content).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def cancel_pending_videos(request):
    content = HomeContent.load()
    content.pending_hero_video_url = None
    content.pending_reservation_video_url = None
    content.save(update_fields=['pending_hero_video_url', 'pending_reservation_video_url', 'updated_at'])
    return Response({'success': True, 'message': 'Đã hủy các video đang chờ'})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsBackOffice])
def hero_videos_status(request):
    return Response({'videos': video_status()})


# ==========================================
# 5. SITEMAP / ROBOTS
# ==========================================
def sitemap(request):
    base = request.build_absolute_uri('/').rstrip('/')
    urls = [(f"{base}/{page}", None) for page in STATIC_PAGES]
    for post in BlogPost.objects.filter(published=True).exclude(slug=''):
        urls.append((f"{base}/blog/{post.slug}", post.updated_at))

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for loc, modified in urls:
        lines.append('  <url>')
        lines.append(f'    <loc>{loc}</loc>')
        if modified:
            lines.append(f'    <lastmod>{modified.date().isoformat()}</lastmod>')
        lines.append('  </url>')
    lines.append('</urlset>')
    return HttpResponse('\n'.join(lines), content_type='application/xml')


def robots(request):
    base = request.build_absolute_uri('/').rstrip('/')
    body = '\n'.join([
        'User-agent: *',
        'Allow: /',
        'Disallow: /admin',
        'Disallow: /staff',
        'Disallow: /api/',
        '',
        f'Sitemap: {base}/sitemap.xml',
    ])
    return HttpResponse(body, content_type='text/plain')
