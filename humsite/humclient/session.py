"""
Trạng thái đăng nhập lưu phía client (tương đương localStorage):
3 key `user`, `loginTime`, `lastActivity` luôn được xóa cùng nhau.
"""
import json
import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

IDENTITY_KEYS = ('user', 'loginTime', 'lastActivity')


def now_ms():
    return int(time.time() * 1000)


class PersistedState:
    """Kho key/value, ghi ra file JSON nếu có `path`, không thì chỉ giữ trong bộ nhớ"""

    def __init__(self, path=None):
        self.path = Path(path) if path else None
        self._data = {}
        if self.path and self.path.exists():
            with self.path.open('r', encoding='utf-8') as f:
                self._data = json.load(f)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value
        self._flush()

    def remove(self, key):
        if self._data.pop(key, None) is not None:
            self._flush()

    def clear_identity(self):
        for key in IDENTITY_KEYS:
            self._data.pop(key, None)
        self._flush()

    def _flush(self):
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open('w', encoding='utf-8') as f:
            json.dump(self._data, f, ensure_ascii=False)


@dataclass(frozen=True)
class Authenticated:
    user: dict | None
    login_time: int | None


@dataclass(frozen=True)
class Anonymous:
    pass


ANONYMOUS = Anonymous()


def read_identity(state):
    """Có `user` hoặc `loginTime` thì coi như đã từng đăng nhập"""
    user = state.get('user')
    login_time = state.get('loginTime')
    if user or login_time:
        return Authenticated(user=user, login_time=login_time)
    return ANONYMOUS


def timer_scheduler(delay, callback):
    """Scheduler mặc định: gọi callback sau `delay` giây trên thread riêng"""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer
