import logging

from . import i18n
from .session import Authenticated, read_identity, timer_scheduler
from .ui import Notice

logger = logging.getLogger(__name__)

LOGIN_PATH = '/login'
REDIRECT_DELAY = 1.0  # giây, để kịp hiện toast


class LogoutDispatcher:
    """
    Được gọi mỗi khi 1 request nhận 401.
    Handler chính: đăng ký sau ghi đè đăng ký trước. Ngoài ra có danh sách subscriber.
    Không chặn gọi lặp: nhiều 401 cùng lúc sẽ gọi handler nhiều lần.
    """

    def __init__(self, handler=None):
        self._handler = handler
        self._subscribers = []

    def set_handler(self, handler):
        self._handler = handler

    def subscribe(self, callback):
        self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback):
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def has_listeners(self):
        return self._handler is not None or bool(self._subscribers)

    def dispatch(self):
        """Trả về False nếu không có ai xử lý"""
        if not self.has_listeners:
            return False
        if self._handler is not None:
            self._handler()
        for callback in list(self._subscribers):
            callback()
        return True


class SessionExpiryHandler:
    """Xóa trạng thái đăng nhập; nếu trước đó đã đăng nhập thì báo hết hạn và chuyển về /login"""

    def __init__(self, state, notifier, navigator, language='vi', scheduler=timer_scheduler, delay=REDIRECT_DELAY):
        self.state = state
        self.notifier = notifier
        self.navigator = navigator
        self.language = language
        self.scheduler = scheduler
        self.delay = delay

    def __call__(self):
        was_logged_in = isinstance(read_identity(self.state), Authenticated)
        self.state.clear_identity()

        if not was_logged_in:
            return

        logger.info("Session expired, redirecting to %s", LOGIN_PATH)
        self.notifier.notify(Notice(
            title=i18n.t('session_expired_title', self.language),
            description=i18n.t('session_expired_desc', self.language),
            variant='destructive',
            duration=5000,
        ))
        if self.navigator.path != LOGIN_PATH:
            self.scheduler(self.delay, lambda: self.navigator.navigate(LOGIN_PATH))

    def install(self, dispatcher):
        dispatcher.set_handler(self)
        return self
