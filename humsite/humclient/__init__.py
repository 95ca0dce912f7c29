"""Client Python cho API Hum's Pizza"""
from .app import ClientApp
from .auth import AuthService
from .cart import Cart, CartItem
from .config import ClientSettings, get_settings
from .errors import ApiError, UploadPhaseError, UploadRejected
from .guards import AdminAuthGuard, AuthGuard, GuardState, StaffAuthGuard
from .http import ApiClient
from .logout import LogoutDispatcher, SessionExpiryHandler
from .session import ANONYMOUS, Anonymous, Authenticated, PersistedState, read_identity
from .timeout import SessionTimeout
from .ui import Navigator, Notice, Notifier
from .uploads import FileInput, ImageUploader, LocalFile, ObjectUploader, VideoPhase, VideoUploader

__all__ = [
    "ANONYMOUS", "AdminAuthGuard", "Anonymous", "ApiClient", "ApiError", "AuthGuard",
    "AuthService", "Authenticated", "Cart", "CartItem", "ClientApp", "ClientSettings", "FileInput",
    "GuardState", "ImageUploader", "LocalFile", "LogoutDispatcher", "Navigator", "Notice",
    "Notifier", "ObjectUploader", "PersistedState", "SessionExpiryHandler", "SessionTimeout",
    "StaffAuthGuard", "UploadPhaseError", "UploadRejected", "VideoPhase", "VideoUploader",
    "get_settings", "read_identity",
]
