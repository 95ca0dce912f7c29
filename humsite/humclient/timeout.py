import logging

from . import i18n
from .session import now_ms
from .ui import Notice

logger = logging.getLogger(__name__)

MINUTE_MS = 60 * 1000


class SessionTimeout:
    """
    Tự đăng xuất khi không hoạt động quá `timeout` (mặc định 30 phút),
    cảnh báo trước `warning` (5 phút). Dù có hoạt động, phiên cũng hết hạn sau 2 x timeout kể từ lúc đăng nhập.
    """

    def __init__(self, state, notifier, navigator, language='vi',
                 timeout=30 * MINUTE_MS, warning=5 * MINUTE_MS,
                 clock=now_ms, on_timeout=None, enabled=True):
        self.state = state
        self.notifier = notifier
        self.navigator = navigator
        self.language = language
        self.timeout = timeout
        self.warning = warning
        self.clock = clock
        self.on_timeout = on_timeout
        self.enabled = enabled

    def update_last_activity(self):
        if self.enabled:
            self.state.set('lastActivity', self.clock())

    def check(self):
        if not self.enabled:
            return True

        login_time = self.state.get('loginTime')
        last_activity = self.state.get('lastActivity') or login_time
        if not login_time or not last_activity:
            return False

        now = self.clock()
        if now - int(last_activity) > self.timeout or now - int(login_time) > self.timeout * 2:
            self.logout()
            return False

        if now - int(last_activity) > self.timeout - self.warning:
            self.notifier.notify(Notice(
                title=i18n.t('session_warning_title', self.language),
                description=i18n.t('session_warning_desc', self.language, minutes=self.warning // MINUTE_MS),
            ))
        return True

    def logout(self):
        was_logged_in = bool(self.state.get('user') or self.state.get('loginTime'))
        self.state.clear_identity()

        if was_logged_in:
            logger.info("Logged out after inactivity")
            self.notifier.notify(Notice(
                title=i18n.t('session_expired_title', self.language),
                description=i18n.t('inactivity_desc', self.language),
                variant='destructive',
            ))
        if self.on_timeout:
            self.on_timeout()
        if self.navigator.path != '/login':
            self.navigator.navigate('/login')
