from rest_framework.permissions import BasePermission

from .models import get_role


class IsAdminRole(BasePermission):
    message = 'Admin access required'

    def has_permission(self, request, view):
        return get_role(request.user) == 'admin'


class IsStaffRole(BasePermission):
    message = 'Staff access required'

    def has_permission(self, request, view):
        return get_role(request.user) == 'staff'


class IsBackOffice(BasePermission):
    """Admin hoặc nhân viên"""
    message = 'Authentication required'

    def has_permission(self, request, view):
        return get_role(request.user) in ('admin', 'staff')


class ReadOnlyOrBackOffice(BasePermission):
    """Khách xem được, chỉ admin/nhân viên được sửa"""
    message = 'Authentication required'

    def has_permission(self, request, view):
        if request.method in ('GET', 'HEAD', 'OPTIONS'):
            return True
        return get_role(request.user) in ('admin', 'staff')


class ReadOnlyOrAdmin(BasePermission):
    """Khách xem được, chỉ admin được sửa (SEO)"""
    message = 'Admin access required'

    def has_permission(self, request, view):
        if request.method in ('GET', 'HEAD', 'OPTIONS'):
            return True
        return get_role(request.user) == 'admin'
