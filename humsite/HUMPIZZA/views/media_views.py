import logging
import mimetypes
import os

from django.http import FileResponse, Http404
from django.urls import reverse
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ..exceptions import UploadRejected
from ..models import HomeContent
from ..permissions import IsAdminRole, IsBackOffice
from ..serializers import SaveVideoSerializer
from ..uploads import (
    asset_path, issue_upload_token, save_upload, store_signed_upload,
    validate_image, validate_video,
)

logger = logging.getLogger(__name__)


def _rejected(e):
    logger.warning("Upload rejected: %s", e.message)
    return Response({'error': e.message}, status=e.status_code)


# ==========================================
# 1. PHỤC VỤ FILE ĐÃ UPLOAD
# ==========================================
def serve_asset(request, filename):
    try:
        path = asset_path(filename)
    except UploadRejected:
        raise Http404('Asset not found')
    if not path.is_file():
        raise Http404('Asset not found')
    content_type = mimetypes.guess_type(filename)[0] or 'application/octet-stream'
    return FileResponse(open(path, 'rb'), content_type=content_type)


# ==========================================
# 2. UPLOAD ẢNH / VIDEO (multipart)
# ==========================================
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsBackOffice])
def upload_image(request):
    upload = request.FILES.get('image')
    if upload is None:
        return Response({'error': 'No image file provided'}, status=status.HTTP_400_BAD_REQUEST)
    try:
        validate_image(upload)
        url = save_upload(upload)
    except UploadRejected as e:
        return _rejected(e)
    return Response({'url': url})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def upload_hero_video(request):
    upload = request.FILES.get('video')
    if upload is None:
        return Response({'error': 'No video file provided'}, status=status.HTTP_400_BAD_REQUEST)
    try:
        validate_video(upload)
        url = save_upload(upload)
    except UploadRejected as e:
        return _rejected(e)
    return Response({'url': url})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def save_hero_video(request):
    """Đánh dấu video vừa upload là 'đang chờ', chỉ áp dụng khi lưu nội dung trang chủ"""
    serializer = SaveVideoSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({'error': 'Thiếu videoUrl hoặc videoType không hợp lệ'}, status=status.HTTP_400_BAD_REQUEST)

    video_url = serializer.validated_data['videoUrl']
    video_type = serializer.validated_data['videoType']
    HomeContent.load().set_pending(video_type, video_url)
    logger.info("Video %s pending: %s", video_type, video_url)

    return Response({
        'success': True,
        'videoType': video_type,
        'videoUrl': video_url,
        'fileName': HomeContent.VIDEO_SLOTS[video_type],
        'message': "Video đã được tải lên. Nhấn 'Lưu thay đổi' để áp dụng.",
    })


# ==========================================
# 3. UPLOAD TRỰC TIẾP QUA URL KÝ SẴN (PUT)
# ==========================================
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsBackOffice])
def object_upload_url(request):
    name = request.data.get('fileName') or ''
    extension = request.data.get('extension') or os.path.splitext(name)[1]
    token = issue_upload_token(extension)
    url = request.build_absolute_uri(reverse('object-put', args=[token]))
    return Response({'method': 'PUT', 'url': url})


@api_view(['PUT'])
@permission_classes([AllowAny])
@authentication_classes([])  # Quyền nằm trong chữ ký của URL
def object_put(request, token):
    try:
        url = store_signed_upload(token, request.body)
    except UploadRejected as e:
        return _rejected(e)
    return Response({'url': url})
