from rest_framework.views import APIView
from rest_framework.response import Response
from django.http import HttpResponse

from events.exports import ExportService
from events.serializers import ClearDataSerializer
from events.services import SettingsService
from .generics import api_error, participant_payload


def _attachment(content, filename, content_type):
    response = HttpResponse(content, content_type=content_type)
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


class ExportCSVView(APIView):
    def get(self, request):
        filename, content = ExportService().export_csv()
        return _attachment(content, filename, "text/csv; charset=utf-8")


class ExportJSONView(APIView):
    def get(self, request):
        filename, content = ExportService().export_json()
        return _attachment(content, filename, "application/json")


class ImportJSONView(APIView):
    """
    POST /api/events/import/
    Either a multipart upload in ``file`` or the backup as the raw JSON body.
    """

    def post(self, request):
        if request.content_type.startswith("multipart/form-data"):
            upload = request.FILES.get("file")
            content = upload.read() if upload is not None else b""
        else:
            # Read the raw body before DRF parses it
            content = request.body

        if not content:
            return api_error("No backup file provided.")

        settings, participants = ExportService().import_json(content)
        return Response({
            "message": "Data imported successfully!",
            "settings": settings.to_dict(),
            "participants": [participant_payload(p) for p in participants],
        })


class ClearDataView(APIView):
    def post(self, request):
        serializer = ClearDataSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        settings = SettingsService().clear_all(serializer.validated_data["confirm"])
        return Response({
            "message": "All data has been cleared.",
            "settings": settings.to_dict(),
        })
