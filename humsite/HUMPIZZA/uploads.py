"""
Lưu file upload (ảnh, video hero) vào ASSETS_DIR và phục vụ qua /api/assets/<tên file>.

- Tên file luôn là uuid4 + phần mở rộng gốc.
- Ảnh: jpeg/jpg/png/gif/webp, video: mp4/webm/ogg (kiểm cả đuôi file lẫn MIME).
- Upload trực tiếp (PUT) dùng URL ký bằng django.core.signing, có hạn dùng.
"""
import logging
import os
import shutil
import uuid
from datetime import datetime, timezone as dt_timezone
from pathlib import Path
from urllib.parse import urlparse

import requests
from django.conf import settings
from django.core import signing
from django.utils import timezone

from .exceptions import UploadRejected
from .models import HomeContent

logger = logging.getLogger(__name__)

IMAGE_TYPES = ('jpeg', 'jpg', 'png', 'gif', 'webp')
VIDEO_TYPES = ('mp4', 'webm', 'ogg')

ASSET_URL_PREFIX = '/api/assets/'
UPLOAD_SALT = 'HUMPIZZA.object-upload'


def assets_dir():
    path = Path(settings.ASSETS_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def asset_url(filename):
    return f"{ASSET_URL_PREFIX}{filename}"


def asset_path(filename):
    """Đường dẫn thật của 1 asset, chặn ../ và thư mục con"""
    if not filename or os.path.basename(filename) != filename or filename.startswith('.'):
        raise UploadRejected('Invalid file name', status_code=404)
    return assets_dir() / filename


def _matches(upload, allowed):
    ext = os.path.splitext(upload.name or '')[1].lower().lstrip('.')
    mime = (upload.content_type or '').lower()
    return ext in allowed and any(t in mime for t in allowed)


def validate_image(upload):
    if not _matches(upload, IMAGE_TYPES):
        raise UploadRejected('Only image files are allowed (jpeg, jpg, png, gif, webp)')
    if upload.size > settings.MAX_IMAGE_UPLOAD_MB * 1024 * 1024:
        raise UploadRejected(f'File too large (max {settings.MAX_IMAGE_UPLOAD_MB}MB)')


def validate_video(upload):
    if not _matches(upload, VIDEO_TYPES):
        raise UploadRejected('Only video files are allowed (mp4, webm, ogg)')
    if upload.size > settings.MAX_VIDEO_UPLOAD_MB * 1024 * 1024:
        raise UploadRejected(f'File too large (max {settings.MAX_VIDEO_UPLOAD_MB}MB)')


def save_upload(upload):
    """Ghi UploadedFile xuống ASSETS_DIR theo từng chunk, trả về URL public"""
    ext = os.path.splitext(upload.name or '')[1].lower()
    filename = f"{uuid.uuid4()}{ext}"
    with open(assets_dir() / filename, 'wb') as out:
        for chunk in upload.chunks():
            out.write(chunk)
    logger.info("Saved upload %s (%s bytes)", filename, upload.size)
    return asset_url(filename)


# ==========================================
# PRE-SIGNED PUT URL
# ==========================================
def issue_upload_token(extension=''):
    ext = ''.join(ch for ch in str(extension).lower() if ch.isalnum())[:10]
    name = f"{uuid.uuid4()}.{ext}" if ext else str(uuid.uuid4())
    return signing.dumps({'name': name}, salt=UPLOAD_SALT)


def read_upload_token(token):
    try:
        data = signing.loads(token, salt=UPLOAD_SALT, max_age=settings.UPLOAD_URL_TTL)
    except signing.SignatureExpired:
        raise UploadRejected('Upload URL expired', status_code=403)
    except signing.BadSignature:
        raise UploadRejected('Invalid upload URL', status_code=403)
    return data['name']


def store_signed_upload(token, body):
    """Lưu body của PUT; mỗi URL chỉ dùng được 1 lần"""
    filename = read_upload_token(token)
    path = asset_path(filename)
    if path.exists():
        raise UploadRejected('Upload URL already used', status_code=403)
    max_bytes = settings.MAX_VIDEO_UPLOAD_MB * 1024 * 1024
    if len(body) > max_bytes:
        raise UploadRejected(f'File too large (max {settings.MAX_VIDEO_UPLOAD_MB}MB)')
    path.write_bytes(body)
    logger.info("Stored signed upload %s (%s bytes)", filename, len(body))
    return asset_url(filename)


# ==========================================
# VIDEO HERO: pending -> áp dụng
# ==========================================
def _stage_video(video_url, video_type):
    """
    Chép (URL nội bộ /api/assets/...) hoặc tải bằng requests (URL ngoài) video đang chờ
    vào 1 file tạm trong ASSETS_DIR. File của slot chưa bị đụng tới.
    """
    staged = assets_dir() / f".staging-{uuid.uuid4().hex}-{HomeContent.VIDEO_SLOTS[video_type]}"
    path = urlparse(video_url).path

    try:
        if path.startswith(ASSET_URL_PREFIX) and not urlparse(video_url).netloc:
            source = asset_path(path[len(ASSET_URL_PREFIX):])
            if not source.exists():
                raise UploadRejected(f'Pending video not found: {video_url}', status_code=404)
            shutil.copyfile(source, staged)
        else:
            _download(video_url, staged)
    except Exception:
        # File tạm dở dang không được để lại
        staged.unlink(missing_ok=True)
        raise
    return staged


def _download(video_url, target):
    try:
        response = requests.get(video_url, stream=True, timeout=60)
        if response.status_code != 200:
            raise UploadRejected(f'Cannot download video: {response.status_code}')
        with open(target, 'wb') as out:
            for chunk in response.iter_content(chunk_size=1024 * 1024):
                out.write(chunk)
    except requests.RequestException as e:
        raise UploadRejected(f'Cannot download video: {e}')


def stage_videos(pending):
    """
    {slot: URL đang chờ} -> {slot: file tạm}.
    1 slot lỗi thì xóa hết file tạm đã tạo và raise, không slot nào bị thay.
    """
    staged = {}
    try:
        for video_type, video_url in pending.items():
            staged[video_type] = _stage_video(video_url, video_type)
    except Exception:
        discard_staged(staged)
        raise
    return staged


def activate_staged(staged):
    """Đổi tên file tạm thành file cố định của slot (hero.landingpage.mp4 / hero2.landingpage.mp4)"""
    for video_type, path in staged.items():
        target = assets_dir() / HomeContent.VIDEO_SLOTS[video_type]
        os.replace(path, target)
        logger.info("Video %s committed to %s", video_type, target.name)


def discard_staged(staged):
    for path in staged.values():
        path.unlink(missing_ok=True)


def video_status():
    content = HomeContent.load()
    labels = {'hero': 'Video Hero Chính', 'reservation': 'Video Hero Phần Đặt Bàn'}
    result = []
    for video_type, filename in HomeContent.VIDEO_SLOTS.items():
        path = assets_dir() / filename
        exists = path.exists()
        pending_url = content.get_pending(video_type)
        entry = {
            'type': video_type,
            'fileName': filename,
            'displayName': labels[video_type],
            'exists': exists or bool(pending_url),
            'fileSize': None,
            'lastModified': None,
            'url': None,
            'isPending': bool(pending_url),
        }
        if pending_url:
            entry['url'] = pending_url
            entry['fileSize'] = 'Đang chờ lưu...'
            entry['lastModified'] = timezone.now().isoformat()
        elif exists:
            stat = path.stat()
            entry['url'] = asset_url(filename)
            entry['fileSize'] = f"{round(stat.st_size / 1024 / 1024, 2)} MB"
            entry['lastModified'] = datetime.fromtimestamp(stat.st_mtime, tz=dt_timezone.utc).isoformat()
        result.append(entry)
    return result
