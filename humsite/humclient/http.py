"""
Gọi API của humsite bằng requests.Session (giữ cookie session như `credentials: include`).

- 401: chuyển cho LogoutDispatcher và trả về None thay vì raise.
- Mã lỗi khác: raise ApiError(status, message) với message lấy từ JSON
  (`message` hoặc `error`), không có thì lấy text, cuối cùng là reason.
- Không tự retry.
"""
import logging

import requests

from .errors import ApiError
from .logout import LogoutDispatcher

logger = logging.getLogger(__name__)


class ApiClient:
    def __init__(self, base_url='', dispatcher=None, session=None, timeout=None):
        self.base_url = base_url.rstrip('/')
        self.dispatcher = dispatcher or LogoutDispatcher()
        self.session = session or requests.Session()
        self.timeout = timeout
        self.cache = {}

    def url(self, path):
        if path.startswith(('http://', 'https://')):
            return path
        return f"{self.base_url}{path}"

    def set_token(self, token):
        if token:
            self.session.headers['Authorization'] = f"Bearer {token}"
        else:
            self.session.headers.pop('Authorization', None)

    # ==========================================
    # REQUEST CHUNG
    # ==========================================
    def request(self, method, path, json=None, files=None, data=None, headers=None, dispatch_401=True):
        """401 -> LogoutDispatcher, trả về None; chưa có listener nào (hoặc dispatch_401=False) thì raise ApiError(401)"""
        response = self.session.request(
            method, self.url(path), json=json, files=files, data=data,
            headers=headers, timeout=self.timeout,
        )

        if response.status_code == 401 and dispatch_401 and self.dispatcher.has_listeners:
            logger.info("%s %s -> 401, dispatching logout", method, path)
            self.dispatcher.dispatch()
            return None

        if not response.ok:
            raise ApiError(response.status_code, _error_message(response))

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {'text': response.text}

    def get(self, path, **kwargs):
        return self.request('GET', path, **kwargs)

    def post(self, path, json=None, **kwargs):
        return self.request('POST', path, json=json, **kwargs)

    def put(self, path, json=None, **kwargs):
        return self.request('PUT', path, json=json, **kwargs)

    def patch(self, path, json=None, **kwargs):
        return self.request('PATCH', path, json=json, **kwargs)

    def delete(self, path, **kwargs):
        return self.request('DELETE', path, **kwargs)

    def get_cached(self, path):
        """GET có cache theo path (staleTime vô hạn), xóa bằng clear_cache()"""
        if path not in self.cache:
            result = self.get(path)
            if result is None:
                return None
            self.cache[path] = result
        return self.cache[path]

    def clear_cache(self):
        self.cache.clear()

    # ==========================================
    # ENDPOINT CỤ THỂ
    # ==========================================
    def me(self, role, dispatch_401=True):
        return self.get(f"/api/{role}/me", dispatch_401=dispatch_401)

    def login(self, username, password):
        return self.post('/api/auth/login', {'username': username, 'password': password})

    def logout(self, role='admin'):
        return self.post(f"/api/{role}/logout")

    def upload_hero_video(self, file):
        return self.post('/api/upload-hero-video', files={'video': (file.name, file.data, file.content_type)})

    def save_hero_video(self, video_url, video_type):
        return self.post('/api/save-hero-video', {'videoUrl': video_url, 'videoType': video_type})

    def get_upload_parameters(self, file_name=''):
        return self.post('/api/objects/upload', {'fileName': file_name})

    def commit_pending_videos(self, **content):
        return self.put('/api/home-content', {**content, 'commitPendingVideos': True})

    def cancel_pending_videos(self):
        return self.post('/api/cancel-pending-videos')

    def submit_order(self, cart, customer_name, customer_email, customer_phone,
                     order_type='takeout', payment_method='cash', customer_address='',
                     special_instructions=''):
        return self.post('/api/orders', {
            'customerName': customer_name,
            'customerEmail': customer_email,
            'customerPhone': customer_phone,
            'customerAddress': customer_address,
            'orderType': order_type,
            'paymentMethod': payment_method,
            'specialInstructions': special_instructions,
            'items': cart.to_order_items(),
        })


def _error_message(response):
    text = response.text
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get('message') or body.get('error')
        if message:
            return message
    return text or response.reason or str(response.status_code)
