import logging

from rest_framework import exceptions, status
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class PinLimitReached(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'pin_limit'


class UploadRejected(Exception):
    """File upload không hợp lệ (sai định dạng / quá dung lượng / token hết hạn)"""

    def __init__(self, message, status_code=400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def api_exception_handler(exc, context):
    """
    Chuẩn hóa lỗi API thành {"message": ...} để client đọc được.
    Lỗi validate của serializer giữ chi tiết trong "errors".
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        response.data = {'message': 'Dữ liệu không hợp lệ', 'errors': response.data}
        return response

    detail = response.data.get('detail') if isinstance(response.data, dict) else None
    if detail is not None:
        response.data = {'message': str(detail)}

    if response.status_code >= 500:
        logger.error("API error in %s: %s", context.get('view'), exc)
    return response
