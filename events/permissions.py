from rest_framework.permissions import BasePermission

from authx.services import AuthService
from core.constants import MSG_ACCESS_DENIED


class IsDeskAdmin(BasePermission):
    """
    Admin-only desk pages (the dashboard). The active session decides;
    it is a UI gate, not an authentication check.
    """
    message = MSG_ACCESS_DENIED

    def has_permission(self, request, view):
        session = AuthService().current_session()
        return bool(session and session.is_admin)
