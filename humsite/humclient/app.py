from .auth import AuthService
from .cart import Cart
from .config import get_settings
from .guards import AdminAuthGuard, StaffAuthGuard
from .http import ApiClient
from .logout import LogoutDispatcher, SessionExpiryHandler
from .session import PersistedState, timer_scheduler
from .timeout import SessionTimeout
from .ui import Navigator, Notifier


class ClientApp:
    """Ghép các thành phần client lại với nhau (tương đương App.tsx + các provider)"""

    def __init__(self, settings=None, session=None, scheduler=timer_scheduler):
        self.settings = settings or get_settings()
        self.language = self.settings.language
        self.state = PersistedState(self.settings.state_file)
        self.notifier = Notifier()
        self.navigator = Navigator()
        self.dispatcher = LogoutDispatcher()
        SessionExpiryHandler(
            self.state, self.notifier, self.navigator, self.language, scheduler=scheduler,
        ).install(self.dispatcher)
        self.client = ApiClient(self.settings.api_base, self.dispatcher, session=session)
        self.auth = AuthService(self.client, self.state, self.navigator)
        self.cart = Cart()
        self.timeout = SessionTimeout(self.state, self.notifier, self.navigator, self.language)

    def admin_guard(self):
        return AdminAuthGuard(self.client, self.state, self.navigator, self.language)

    def staff_guard(self):
        return StaffAuthGuard(self.client, self.state, self.navigator, self.language)
