# core/serializers.py
"""
Schemas for every record persisted in the store.

They validate what comes back from storage (and from JSON imports) before
it reaches the application state; ``save()`` returns the matching record
from ``core.records``.
"""
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import serializers

from .constants import PARTICIPANT_TYPES, ROLE_CHOICES, THEMES
from .records import EventSettings, Member, Participant, Session, UserAccount


def _validate_iso_datetime(value):
    try:
        parsed = parse_datetime(value)
    except ValueError:
        parsed = None
    if parsed is None:
        raise serializers.ValidationError("Expected an ISO 8601 timestamp.")
    return value


class EventSettingsRecordSerializer(serializers.Serializer):
    eventName = serializers.CharField(source="event_name", allow_blank=True, max_length=255)
    eventDate = serializers.CharField(source="event_date")
    minTeamSize = serializers.IntegerField(source="min_team_size", min_value=1)
    maxTeamSize = serializers.IntegerField(source="max_team_size", min_value=1)

    def validate_eventDate(self, value):
        try:
            parsed = parse_date(value)
        except ValueError:
            parsed = None
        if parsed is None:
            raise serializers.ValidationError("Expected a YYYY-MM-DD date.")
        return parsed.isoformat()

    def validate(self, attrs):
        if attrs["min_team_size"] > attrs["max_team_size"]:
            raise serializers.ValidationError("minTeamSize must be <= maxTeamSize.")
        return attrs

    def create(self, validated_data):
        return EventSettings(**validated_data)


class MemberRecordSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, default="")
    email = serializers.CharField(allow_blank=True, default="")
    phone = serializers.CharField(allow_blank=True, default="")


class ParticipantRecordSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=128)
    type = serializers.ChoiceField(choices=PARTICIPANT_TYPES)
    name = serializers.CharField(allow_blank=True, default="")
    email = serializers.CharField(allow_blank=True, default="")
    phone = serializers.CharField(allow_blank=True, default="")
    teamName = serializers.CharField(source="team_name", allow_blank=True, default="")
    members = MemberRecordSerializer(many=True, default=list)
    present = serializers.BooleanField(default=False)
    registeredAt = serializers.CharField(source="registered_at")

    def validate_registeredAt(self, value):
        return _validate_iso_datetime(value)

    def create(self, validated_data):
        members = [Member(**dict(m)) for m in validated_data.pop("members", [])]
        return Participant(members=members, **validated_data)


class UserAccountRecordSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=128)
    name = serializers.CharField()
    email = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)
    role = serializers.ChoiceField(choices=ROLE_CHOICES)
    createdAt = serializers.CharField(source="created_at")

    def validate_createdAt(self, value):
        return _validate_iso_datetime(value)

    def create(self, validated_data):
        return UserAccount(**validated_data)


class SessionRecordSerializer(serializers.Serializer):
    id = serializers.CharField()
    email = serializers.CharField()
    name = serializers.CharField()
    role = serializers.ChoiceField(choices=ROLE_CHOICES)

    def create(self, validated_data):
        return Session(**validated_data)


class ThemeRecordSerializer(serializers.Serializer):
    theme = serializers.ChoiceField(choices=THEMES)


def build_record(serializer_class, data):
    """
    Validate ``data`` with ``serializer_class`` and return the record, or
    raise ``serializers.ValidationError`` with the field errors.
    """
    serializer = serializer_class(data=data)
    serializer.is_valid(raise_exception=True)
    return serializer.save()
