from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from django.http import HttpResponse

from events.qr import make_qr_data_uri, make_qr_png
from events.serializers import CheckInSerializer
from events.services import ParticipantService
from .generics import participant_payload


class ScanQRView(APIView):
    """
    POST /api/events/scan/
    Body: {"data": "<pasted QR payload>"}
    """

    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "qr-scan"

    def post(self, request):
        serializer = CheckInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        participant = ParticipantService().check_in(serializer.validated_data["data"])
        return Response(
            {
                "message": f"{participant.label} checked in successfully!",
                "participant": participant_payload(participant),
            }
        )


class ParticipantQRView(APIView):
    def get(self, request, participant_id):
        payload = ParticipantService().qr_payload(participant_id)
        return Response({
            "id": participant_id,
            "payload": payload,
            "data_uri": make_qr_data_uri(payload),
        })


class ParticipantQRImageView(APIView):
    """
    GET /api/events/participants/<participant_id>/qr.png
    """

    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "qr-image"

    def get(self, request, participant_id):
        payload = ParticipantService().qr_payload(participant_id)

        response = HttpResponse(make_qr_png(payload), content_type="image/png")
        response["Content-Disposition"] = f'inline; filename="qr_{participant_id}.png"'
        response["Cache-Control"] = "no-store"
        return response
