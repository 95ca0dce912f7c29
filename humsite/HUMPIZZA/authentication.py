from rest_framework.authentication import SessionAuthentication


class CsrfExemptSessionAuthentication(SessionAuthentication):
    """Cookie session cho client JSON (fetch credentials: include), không kiểm tra CSRF"""

    def enforce_csrf(self, request):
        return
