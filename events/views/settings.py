from rest_framework.views import APIView
from rest_framework.response import Response

from events.serializers import SettingsFormSerializer
from events.services import SettingsService


class EventSettingsView(APIView):
    def get(self, request):
        return Response(SettingsService().get().to_dict())

    def put(self, request):
        serializer = SettingsFormSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        settings = SettingsService().apply(serializer.validated_data)
        return Response({
            "message": "Settings saved successfully!",
            "settings": settings.to_dict(),
        })
