from rest_framework.views import APIView
from rest_framework.response import Response

from core.state import StateRepository
from events.analytics import get_dashboard_stats
from events.permissions import IsDeskAdmin


class AdminDashboardView(APIView):
    """
    GET /api/events/dashboard/
    Admin sessions only.
    """

    permission_classes = [IsDeskAdmin]

    def get(self, request):
        return Response(get_dashboard_stats(StateRepository().read()))
