"""Toast và điều hướng, thay cho phần giao diện trình duyệt"""
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    title: str
    description: str = ''
    variant: str = 'default'  # default, destructive
    duration: int | None = None  # ms


class Notifier:
    """Ghi toast ra log và giữ lại danh sách đã hiện"""

    def __init__(self):
        self.shown = []

    def notify(self, notice):
        self.shown.append(notice)
        level = logging.WARNING if notice.variant == 'destructive' else logging.INFO
        logger.log(level, "%s: %s", notice.title, notice.description)


class Navigator:
    def __init__(self, path='/'):
        self.path = path
        self.history = []

    def navigate(self, path):
        logger.debug("Navigate %s -> %s", self.path, path)
        self.history.append(path)
        self.path = path
