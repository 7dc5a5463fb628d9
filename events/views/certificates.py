from rest_framework.views import APIView
from django.http import HttpResponse

from events.certificate_generator import CertificateService
from events.serializers import CertificateRequestSerializer


class CertificatesView(APIView):
    """
    POST /api/events/certificates/
    Body: {"ids": [...], "format": "html" | "pdf"}
    """

    def post(self, request):
        serializer = CertificateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ids = serializer.validated_data["ids"]

        if serializer.validated_data["format"] == CertificateRequestSerializer.FORMAT_PDF:
            response = HttpResponse(CertificateService().pdf(ids), content_type="application/pdf")
            response["Content-Disposition"] = 'attachment; filename="certificates.pdf"'
            return response

        return HttpResponse(CertificateService().html(ids), content_type="text/html; charset=utf-8")
