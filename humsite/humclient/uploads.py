"""
Hai luồng upload phía client:

1. ObjectUploader: kiểm tra file, xin URL ký sẵn rồi PUT thẳng nội dung file lên URL đó.
2. VideoUploader: upload video hero qua multipart, sau đó đăng ký video là "đang chờ"
   cho slot `hero` hoặc `reservation` (chỉ áp dụng khi lưu nội dung trang chủ).
"""
import enum
import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urljoin

import requests

from . import i18n
from .errors import ApiError, UploadPhaseError, UploadRejected
from .ui import Notice

logger = logging.getLogger(__name__)

MB = 1024 * 1024


@dataclass
class LocalFile:
    name: str
    content_type: str
    data: bytes = b''
    declared_size: int | None = None

    @property
    def size(self):
        return self.declared_size if self.declared_size is not None else len(self.data)

    @classmethod
    def from_path(cls, path, content_type=None):
        path = Path(path)
        guessed = content_type or mimetypes.guess_type(path.name)[0] or 'application/octet-stream'
        return cls(name=path.name, content_type=guessed, data=path.read_bytes())


class FileInput:
    """Ô chọn file: `files` là danh sách đã chọn, reset() để chọn lại đúng file cũ"""

    def __init__(self, files=None):
        self.files = list(files or [])
        self.reset_count = 0

    def reset(self):
        self.files = []
        self.reset_count += 1


@dataclass
class UploadBatchResult:
    successful: list = field(default_factory=list)
    failed: list = field(default_factory=list)


def normalize_upload_url(url):
    """Bỏ query string của URL ký sẵn"""
    return url.split('?', 1)[0]


# ==========================================
# 1. UPLOAD QUA URL KÝ SẴN
# ==========================================
def _stored_url(response, upload_url):
    """URL đọc được của file vừa PUT: server trả {url} thì dùng, không thì lấy URL ký sẵn bỏ query"""
    if response.content:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get('url'):
            return urljoin(upload_url, body['url'])
    return normalize_upload_url(upload_url)


class ObjectUploader:
    def __init__(self, get_upload_parameters, notifier, language='vi', session=None,
                 max_files=1, max_file_size=10 * MB, allowed_types=None,
                 on_complete=None, on_progress=None):
        self.get_upload_parameters = get_upload_parameters
        self.notifier = notifier
        self.language = language
        self.session = session or requests.Session()
        self.max_files = max_files
        self.max_file_size = max_file_size
        # None: nhận mọi ảnh và video
        self.allowed_types = allowed_types
        self.on_complete = on_complete
        self.on_progress = on_progress
        self.is_open = False
        self.uploading = False

    def _type_allowed(self, content_type):
        content_type = (content_type or '').lower()
        if self.allowed_types is None:
            return content_type.startswith(('image/', 'video/'))
        return content_type in self.allowed_types

    def validate(self, file):
        if file.size > self.max_file_size:
            raise UploadRejected('too_large', i18n.t(
                'file_too_large_desc', self.language, max_mb=round(self.max_file_size / MB)))
        if not self._type_allowed(file.content_type):
            types = ', '.join(self.allowed_types or ['image/*', 'video/*'])
            raise UploadRejected('invalid_type', i18n.t('invalid_type_desc', self.language, types=types))

    def _reject(self, title_key, error):
        logger.info("File rejected (%s): %s", error.reason, error.message)
        self.notifier.notify(Notice(
            title=i18n.t(title_key, self.language), description=error.message, variant='destructive',
        ))

    def select(self, files):
        """Lọc file hợp lệ (không gửi request nào với file bị loại)"""
        files = list(files)
        accepted = []
        if len(files) > self.max_files:
            self._reject('too_many_files_title', UploadRejected('too_many', i18n.t(
                'too_many_files_desc', self.language, max_files=self.max_files)))
            files = files[:self.max_files]
        for file in files:
            try:
                self.validate(file)
            except UploadRejected as e:
                title = 'file_too_large_title' if e.reason == 'too_large' else 'invalid_type_title'
                self._reject(title, e)
                continue
            accepted.append(file)
        return accepted

    def upload_one(self, file):
        params = self.get_upload_parameters()
        if not params or not params.get('url'):
            raise ApiError(0, 'No upload URL returned')
        url = params['url']
        response = self.session.request(
            params.get('method', 'PUT'), url, data=file.data,
            headers={'Content-Type': file.content_type},
        )
        if not response.ok:
            raise ApiError(response.status_code, f"Upload failed: {response.status_code}")
        return _stored_url(response, url)

    def upload(self, files):
        accepted = self.select(files)
        if not accepted:
            return None

        self.is_open = True
        self.uploading = True
        result = UploadBatchResult()
        total = len(accepted)
        try:
            for done, file in enumerate(accepted, start=1):
                try:
                    result.successful.append(self.upload_one(file))
                except (ApiError, requests.RequestException) as e:
                    # Lỗi 1 file không làm hỏng cả lô
                    logger.error("Upload error for %s: %s", file.name, e)
                    result.failed.append({'file': file.name, 'error': e})
                if self.on_progress:
                    self.on_progress(done, total)
        finally:
            self.uploading = False

        if self.on_complete:
            self.on_complete(result)
        self.is_open = False
        return result


class ImageUploader(ObjectUploader):
    """1 ảnh, tối đa 2MB"""
    IMAGE_TYPES = ['image/jpeg', 'image/png', 'image/webp', 'image/gif']

    def __init__(self, get_upload_parameters, notifier, **kwargs):
        kwargs.update(max_files=1, max_file_size=2 * MB, allowed_types=self.IMAGE_TYPES)
        super().__init__(get_upload_parameters, notifier, **kwargs)


# ==========================================
# 2. VIDEO HERO: upload rồi đăng ký "đang chờ"
# ==========================================
class VideoPhase(enum.Enum):
    VALIDATE = 'validate'
    UPLOAD = 'upload'
    REGISTER = 'register'


class VideoUploader:
    def __init__(self, client, video_type, notifier, language='vi', max_file_size=200 * MB, on_complete=None):
        if video_type not in ('hero', 'reservation'):
            raise ValueError(f"Unknown video slot: {video_type}")
        self.client = client
        self.video_type = video_type
        self.notifier = notifier
        self.language = language
        self.max_file_size = max_file_size
        self.on_complete = on_complete
        self.uploading = False

    def validate(self, file):
        if file.size > self.max_file_size:
            raise UploadRejected('too_large', i18n.t(
                'video_too_large_desc', self.language, max_mb=round(self.max_file_size / MB)))
        if not (file.content_type or '').startswith('video/'):
            raise UploadRejected('invalid_type', i18n.t('invalid_video_desc', self.language))

    def _upload(self, file):
        try:
            data = self.client.upload_hero_video(file)
        except (ApiError, requests.RequestException) as e:
            raise UploadPhaseError(VideoPhase.UPLOAD, e)
        if not data or not data.get('url'):
            raise UploadPhaseError(VideoPhase.UPLOAD, message=i18n.t('upload_error_desc', self.language))
        return data['url']

    def _register(self, video_url):
        try:
            result = self.client.save_hero_video(video_url, self.video_type)
        except (ApiError, requests.RequestException) as e:
            raise UploadPhaseError(VideoPhase.REGISTER, e)
        if result is None:
            raise UploadPhaseError(VideoPhase.REGISTER, message=i18n.t('upload_error_desc', self.language))
        return result

    def run(self, file):
        """VALIDATE -> UPLOAD -> REGISTER; bước REGISTER lỗi thì không upload lại"""
        try:
            self.validate(file)
        except UploadRejected as e:
            raise UploadPhaseError(VideoPhase.VALIDATE, e)
        video_url = self._upload(file)
        return self._register(video_url)

    def handle_select(self, file_input):
        if not file_input.files:
            return None

        file = file_input.files[0]
        self.uploading = True
        try:
            result = self.run(file)
        except UploadPhaseError as e:
            outcome = self._fail(e)
        else:
            outcome = self._succeed(result)
        finally:
            self.uploading = False
            file_input.reset()

        if self.on_complete:
            self.on_complete(outcome)
        return outcome

    def _succeed(self, result):
        message = result.get('message')
        self.notifier.notify(Notice(
            title=i18n.t('video_uploaded_title', self.language),
            description=message or i18n.t('video_uploaded_desc', self.language),
            duration=5000,
        ))
        return {'success': True, 'fileName': result.get('fileName'), 'message': message}

    def _fail(self, error):
        if error.phase is VideoPhase.VALIDATE:
            reason = error.cause.reason
            title = 'file_too_large_title' if reason == 'too_large' else 'invalid_type_title'
            description = error.message
        else:
            logger.error("Video upload failed at %s: %s", error.phase.value, error.message)
            title = 'upload_error_title'
            description = error.message or i18n.t('upload_error_desc', self.language)
        self.notifier.notify(Notice(
            title=i18n.t(title, self.language), description=description, variant='destructive',
        ))
        return {'success': False}
