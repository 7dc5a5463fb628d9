from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from core.records import session_to_dict
from .serializers import SignupSerializer, LoginSerializer
from .services import AuthService


class SignupView(APIView):
    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        session = AuthService().signup(**serializer.validated_data)
        return Response(
            {
                "message": f"Welcome {session.name}! Your account has been created successfully.",
                "session": session.to_dict(),
            },
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        session = AuthService().login(**serializer.validated_data)
        return Response(
            {
                "message": f"Welcome back, {session.name}!",
                "session": session.to_dict(),
            },
            status=status.HTTP_200_OK,
        )


class LogoutView(APIView):
    def post(self, request):
        AuthService().logout()
        return Response({"message": "You have been logged out successfully."})


class SessionView(APIView):
    """
    GET /api/auth/session/
    Returns the active desk session, or null when nobody is signed in.
    """

    def get(self, request):
        session = AuthService().current_session()
        return Response({
            "authenticated": session is not None,
            "is_admin": bool(session and session.is_admin),
            "session": session_to_dict(session),
        })
