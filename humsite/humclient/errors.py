class ApiError(Exception):
    """Response khác 2xx (trừ 401) từ API"""

    def __init__(self, status, message):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


class UploadRejected(Exception):
    """File bị từ chối ngay ở client, chưa gửi request nào"""

    def __init__(self, reason, message):
        super().__init__(message)
        self.reason = reason  # too_large, invalid_type, too_many
        self.message = message


class UploadPhaseError(Exception):
    """Lỗi ở 1 bước của quy trình upload video"""

    def __init__(self, phase, cause=None, message=None):
        if message is None and cause is not None:
            message = getattr(cause, 'message', None) or str(cause)
        super().__init__(message or phase)
        self.phase = phase
        self.cause = cause
        self.message = message or ''
