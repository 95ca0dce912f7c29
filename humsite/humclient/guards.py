import enum
import logging
from dataclasses import dataclass

from . import i18n
from .errors import ApiError

logger = logging.getLogger(__name__)


class GuardState(enum.Enum):
    CHECKING = 'checking'
    AUTHENTICATED = 'authenticated'
    UNAUTHENTICATED = 'unauthenticated'


@dataclass(frozen=True)
class LoadingPlaceholder:
    message: str


class AuthGuard:
    """
    Bảo vệ trang admin/nhân viên:
    CHECKING -> AUTHENTICATED (hiện nội dung) hoặc UNAUTHENTICATED (401 thì về /login đúng 1 lần).
    Gọi "who am I" 1 lần duy nhất, không retry.
    """
    role = None
    login_path = '/login'

    def __init__(self, client, state, navigator, language='vi'):
        self.client = client
        self.state = state
        self.navigator = navigator
        self.language = language
        self.status = GuardState.CHECKING
        self.user = None
        self.error = None
        self._checked = False

    @property
    def endpoint(self):
        return f"/api/{self.role}/me"

    def check(self):
        if self._checked:
            return self.status
        self._checked = True

        try:
            # 401 tự xử lý ở đây, không qua LogoutDispatcher
            user = self.client.me(self.role, dispatch_401=False)
        except ApiError as e:
            self.error = e
            self.status = GuardState.UNAUTHENTICATED
            if e.status == 401:
                self.state.clear_identity()
                self.navigator.navigate(self.login_path)
            else:
                logger.warning("Auth check %s failed: %s", self.endpoint, e)
            return self.status

        if user:
            self.user = user
            self.status = GuardState.AUTHENTICATED
        else:
            self.status = GuardState.UNAUTHENTICATED
        return self.status

    def render(self, children):
        if self.status is GuardState.CHECKING:
            return LoadingPlaceholder(i18n.t('checking_login', self.language))
        if self.status is GuardState.AUTHENTICATED:
            return children
        return None

    def mount(self, children):
        """Lần render đầu (loading), sau đó kiểm tra và trả về lần render tiếp theo"""
        first = self.render(children)
        self.check()
        return first, self.render(children)


class AdminAuthGuard(AuthGuard):
    role = 'admin'


class StaffAuthGuard(AuthGuard):
    role = 'staff'
