from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from events.serializers import RegistrationSerializer
from events.services import ParticipantService
from .generics import participant_payload


class ParticipantListCreateView(APIView):
    """
    GET  /api/events/participants/?q=<text>
    POST /api/events/participants/   (solo or team registration)
    """

    def get(self, request):
        participants = ParticipantService().search(request.query_params.get("q", ""))
        return Response([participant_payload(p) for p in participants])

    def post(self, request):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        participant = ParticipantService().register(serializer.validated_data)
        return Response(
            {
                "message": f"{participant.label} registered successfully.",
                "participant": participant_payload(participant),
            },
            status=status.HTTP_201_CREATED,
        )


class ParticipantDetailView(APIView):
    def get(self, request, participant_id):
        participant = ParticipantService().get(participant_id)
        return Response(participant_payload(participant))

    def put(self, request, participant_id):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        participant = ParticipantService().update(participant_id, serializer.validated_data)
        return Response(
            {
                "message": "Registration updated successfully.",
                "participant": participant_payload(participant),
            }
        )

    def delete(self, request, participant_id):
        removed = ParticipantService().delete(participant_id)
        return Response({"message": f"{removed.label} was removed.", "id": removed.id})


class ParticipantFormView(APIView):
    """
    GET /api/events/participants/form/?size=<n>
    Blank registration form with ``size`` empty member rows.
    """

    def get(self, request):
        form = ParticipantService().blank_form(request.query_params.get("size"))
        return Response(form)


class ParticipantEditFormView(APIView):
    def get(self, request, participant_id):
        return Response(ParticipantService().edit_form(participant_id))


class ToggleAttendanceView(APIView):
    def post(self, request, participant_id):
        participant = ParticipantService().toggle_attendance(participant_id)
        return Response(participant_payload(participant))
