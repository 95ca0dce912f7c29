"""
Thông báo song ngữ cho phần client (toast, trạng thái đang tải...).
Tiếng Việt là mặc định, thiếu key ở tiếng Anh thì lấy bản tiếng Việt.
"""
import logging

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = 'vi'

TRANSLATIONS = {
    'vi': {
        'checking_login': 'Đang kiểm tra đăng nhập...',
        'uploading': 'Đang tải lên...',
        'session_expired_title': 'Phiên đăng nhập hết hạn',
        'session_expired_desc': 'Phiên đăng nhập của bạn đã hết hạn. Vui lòng đăng nhập lại để tiếp tục.',
        'inactivity_desc': 'Bạn đã bị đăng xuất do không hoạt động trong thời gian dài',
        'session_warning_title': 'Cảnh báo phiên đăng nhập',
        'session_warning_desc': 'Phiên đăng nhập sẽ hết hạn trong {minutes} phút. Vui lòng thực hiện thao tác để duy trì phiên.',
        'file_too_large_title': 'File quá lớn',
        'file_too_large_desc': 'Kích thước file không được vượt quá {max_mb}MB',
        'video_too_large_desc': 'Kích thước video không được vượt quá {max_mb}MB',
        'invalid_type_title': 'Định dạng file không hợp lệ',
        'invalid_type_desc': 'Chỉ chấp nhận các định dạng: {types}',
        'invalid_video_desc': 'Chỉ chấp nhận file video (MP4, WEBM, MOV)',
        'too_many_files_title': 'Quá nhiều file',
        'too_many_files_desc': 'Chỉ được chọn tối đa {max_files} file',
        'video_uploaded_title': 'Video đã được tải lên!',
        'video_uploaded_desc': "Video sẽ áp dụng khi bấm 'Lưu thay đổi' bên dưới.",
        'upload_error_title': 'Lỗi tải lên',
        'upload_error_desc': 'Có lỗi xảy ra khi tải lên video',
        'logout_success': 'Đăng xuất thành công',
    },
    'en': {
        'checking_login': 'Checking login...',
        'uploading': 'Uploading...',
        'session_expired_title': 'Session Expired',
        'session_expired_desc': 'Your session has expired. Please log in again to continue.',
        'inactivity_desc': 'You have been logged out due to inactivity',
        'session_warning_title': 'Session Warning',
        'session_warning_desc': 'Your session will expire in {minutes} minutes. Please perform an action to maintain your session.',
        'file_too_large_title': 'File too large',
        'file_too_large_desc': 'File size must not exceed {max_mb}MB',
        'video_too_large_desc': 'Video size must not exceed {max_mb}MB',
        'invalid_type_title': 'Invalid file type',
        'invalid_type_desc': 'Accepted formats: {types}',
        'invalid_video_desc': 'Only video files are accepted (MP4, WEBM, MOV)',
        'too_many_files_title': 'Too many files',
        'too_many_files_desc': 'You can select at most {max_files} file(s)',
        'video_uploaded_title': 'Video uploaded!',
        'video_uploaded_desc': "The video will go live when you click 'Save changes' below.",
        'upload_error_title': 'Upload error',
        'upload_error_desc': 'Something went wrong while uploading the video',
        'logout_success': 'Logged out successfully',
    },
}


def t(key, language=DEFAULT_LANGUAGE, **params):
    catalogue = TRANSLATIONS.get(language) or TRANSLATIONS[DEFAULT_LANGUAGE]
    text = catalogue.get(key) or TRANSLATIONS[DEFAULT_LANGUAGE].get(key)
    if text is None:
        logger.warning("Missing translation for %r", key)
        return key
    return text.format(**params) if params else text
