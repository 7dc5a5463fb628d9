from rest_framework.response import Response
from rest_framework import status

from core.records import Participant


def api_error(message: str, status_code=status.HTTP_400_BAD_REQUEST):
    """
    Small helper to standardize error responses across the events app.
    Always returns: {"error": "<message>"} with the given status code.
    """
    return Response({"error": message}, status=status_code)


def participant_payload(participant: Participant) -> dict:
    """
    Stored record plus the fields the attendance table shows.
    """
    data = participant.to_dict()
    data["displayName"] = participant.display_name
    data["contact"] = participant.contact
    return data
