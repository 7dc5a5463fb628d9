from rest_framework import serializers

from core.constants import ROLE_CHOICES, ROLE_PARTICIPANT


class SignupSerializer(serializers.Serializer):
    # Emptiness is checked by AuthService so every form gets the same message
    name = serializers.CharField(allow_blank=True, default="")
    email = serializers.CharField(allow_blank=True, default="")
    password = serializers.CharField(allow_blank=True, default="", trim_whitespace=False, write_only=True)
    role = serializers.ChoiceField(choices=ROLE_CHOICES, default=ROLE_PARTICIPANT)


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(allow_blank=True, default="")
    password = serializers.CharField(allow_blank=True, default="", trim_whitespace=False, write_only=True)
