import logging

from .session import now_ms

logger = logging.getLogger(__name__)


class AuthService:
    """Đăng nhập / đăng xuất phía client, giữ 3 key user, loginTime, lastActivity"""

    def __init__(self, client, state, navigator):
        self.client = client
        self.state = state
        self.navigator = navigator

    def login(self, username, password):
        data = self.client.login(username, password)
        if not data:
            return None
        user = data.get('user')
        self.client.set_token(data.get('token'))
        now = now_ms()
        self.state.set('user', user)
        self.state.set('loginTime', now)
        self.state.set('lastActivity', now)
        logger.info("Logged in as %s", user.get('username') if user else username)
        return user

    def logout(self, role=None):
        user = self.state.get('user') or {}
        role = role or ('staff' if user.get('role') == 'staff' else 'admin')
        try:
            self.client.logout(role)
        finally:
            self.client.set_token(None)
            self.client.clear_cache()
            self.state.clear_identity()
            self.navigator.navigate('/')
