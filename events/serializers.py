from rest_framework import serializers

from core.constants import PARTICIPANT_TYPES, TYPE_SOLO
from core.serializers import MemberRecordSerializer


# -----------------------------------------
# Request bodies. Required-field rules live in the services so every
# client gets the same messages.
# -----------------------------------------
class RegistrationSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=PARTICIPANT_TYPES, default=TYPE_SOLO)
    name = serializers.CharField(allow_blank=True, default="")
    email = serializers.CharField(allow_blank=True, default="")
    phone = serializers.CharField(allow_blank=True, default="")
    teamName = serializers.CharField(allow_blank=True, default="")
    members = MemberRecordSerializer(many=True, default=list)


class SettingsFormSerializer(serializers.Serializer):
    # Sizes stay text here; SettingsService applies the lenient parsing
    eventName = serializers.CharField(allow_blank=True, allow_null=True, default="")
    eventDate = serializers.CharField(allow_blank=True, allow_null=True, default="")
    minTeamSize = serializers.CharField(allow_blank=True, allow_null=True, default="")
    maxTeamSize = serializers.CharField(allow_blank=True, allow_null=True, default="")


class CheckInSerializer(serializers.Serializer):
    data = serializers.CharField(allow_blank=True, default="")


class CertificateRequestSerializer(serializers.Serializer):
    FORMAT_HTML = "html"
    FORMAT_PDF = "pdf"

    ids = serializers.ListField(child=serializers.CharField(), default=list)
    format = serializers.ChoiceField(choices=[FORMAT_HTML, FORMAT_PDF], default=FORMAT_HTML)


class ClearDataSerializer(serializers.Serializer):
    confirm = serializers.BooleanField(default=False)
