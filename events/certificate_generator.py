# events/certificate_generator.py
"""
Certificates of participation.

A certificate is a pure projection of a participant and the event
settings; nothing is stored. Output is either printable HTML markup or a
PDF with one landscape A4 page per certificate.
"""
from dataclasses import dataclass, field
from datetime import date
from io import BytesIO
from typing import Iterable, List

from django.conf import settings as django_settings
from django.utils import timezone
from django.utils.dateparse import parse_date
from django.utils.html import format_html, format_html_join

from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib import colors

from core.constants import MSG_EMPTY_CERT_SELECTION
from core.exceptions import ValidationFailed
from core.records import EventSettings, Participant
from core.state import StateRepository
from .datetime_utils import format_for_display

CERTIFICATE_TITLE = "Certificate of Participation"


@dataclass
class Certificate:
    recipient: str
    event_name: str
    event_date: str
    issued_on: date
    members: List[str] = field(default_factory=list)

    @classmethod
    def for_participant(cls, participant: Participant, settings: EventSettings, issued_on: date):
        return cls(
            recipient=participant.label,
            event_name=settings.event_name,
            event_date=settings.event_date,
            issued_on=issued_on,
            members=[m.name for m in participant.members] if participant.is_team else [],
        )

    @property
    def event_date_display(self) -> str:
        parsed = parse_date(self.event_date)
        return format_for_display(parsed) if parsed else self.event_date


def _hex_to_color(hex_str, default=colors.HexColor("#2c3e50")):
    """
    Safely convert a HEX string (#RRGGBB) to a reportlab Color.
    """
    try:
        return colors.HexColor(hex_str)
    except (TypeError, ValueError):
        return default


# -------------------------
# HTML
# -------------------------
def render_certificate_html(cert: Certificate) -> str:
    member_list = ""
    if cert.members:
        member_list = format_html(
            '<div class="text-muted mt-2">Team Members: {}</div>',
            ", ".join(cert.members),
        )

    return format_html(
        '<div class="certificate">'
        '<div class="cert-title">{}</div>'
        '<div class="text-muted">{} &bull; {}</div>'
        '<div class="cert-line">This certificate is awarded to</div>'
        '<div class="cert-name">{}</div>'
        '{}'
        '<div class="mt-3">in recognition of their participation in the event.</div>'
        '<div class="mt-3 text-muted">Date: {}</div>'
        '</div>',
        CERTIFICATE_TITLE,
        cert.event_name,
        cert.event_date,
        cert.recipient,
        member_list,
        format_for_display(cert.issued_on),
    )


def render_certificates_html(certificates: Iterable[Certificate]) -> str:
    body = format_html_join("\n", "{}", ((render_certificate_html(c),) for c in certificates))
    return format_html('<div class="print-area">\n{}\n</div>', body)


# -------------------------
# PDF
# -------------------------
def _draw_certificate(p, cert: Certificate, page_size, accent_color):
    width, height = page_size

    # ---------- Border ----------
    p.setStrokeColor(accent_color)
    p.setLineWidth(4)
    margin = 30
    p.rect(
        margin,
        margin,
        width - 2 * margin,
        height - 2 * margin,
        stroke=1,
        fill=0,
    )

    # ---------- Title ----------
    p.setFillColor(accent_color)
    p.setFont("Helvetica-Bold", 36)
    p.drawCentredString(width / 2.0, height - 120, CERTIFICATE_TITLE)

    p.setFont("Helvetica", 14)
    p.drawCentredString(
        width / 2.0, height - 150, f"{cert.event_name} • {cert.event_date_display}"
    )

    # ---------- Body text ----------
    p.setFillColor(colors.black)
    p.setFont("Helvetica", 18)
    p.drawCentredString(width / 2.0, height - 210, "This certificate is awarded to")

    p.setFont("Helvetica-Bold", 28)
    p.drawCentredString(width / 2.0, height - 255, cert.recipient)

    y = height - 290
    if cert.members:
        p.setFont("Helvetica-Oblique", 13)
        p.drawCentredString(width / 2.0, y, "Team Members: " + ", ".join(cert.members))
        y -= 30

    p.setFont("Helvetica", 16)
    p.drawCentredString(width / 2.0, y - 10, "in recognition of their participation in the event.")

    # ---------- Footer ----------
    p.setFont("Helvetica-Oblique", 12)
    p.drawString(margin + 10, 80, f"Issued by {cert.event_name}")
    p.drawRightString(width - margin - 10, 80, f"Date: {format_for_display(cert.issued_on)}")

    p.showPage()


def generate_certificates_pdf(certificates: Iterable[Certificate]) -> bytes:
    """
    Render every certificate onto its own landscape A4 page and return the
    PDF bytes.
    """
    buffer = BytesIO()

    page_size = landscape(A4)
    p = canvas.Canvas(buffer, pagesize=page_size)
    p.setTitle(CERTIFICATE_TITLE)

    accent_hex = getattr(django_settings, "EMS_CERTIFICATE_ACCENT", "#2c3e50")
    accent_color = _hex_to_color(accent_hex)

    for cert in certificates:
        _draw_certificate(p, cert, page_size, accent_color)

    p.save()
    return buffer.getvalue()


class CertificateService:
    def __init__(self, repository: StateRepository = None):
        self.repository = repository or StateRepository()

    def build(self, participant_ids) -> List[Certificate]:
        """
        Certificates for the selected ids, in selection order. Ids that no
        longer exist are skipped.
        """
        if not participant_ids:
            raise ValidationFailed(MSG_EMPTY_CERT_SELECTION)

        state = self.repository.read()
        issued_on = timezone.localdate()

        certificates = []
        for participant_id in participant_ids:
            participant = state.find_participant(participant_id)
            if participant is None:
                continue
            certificates.append(Certificate.for_participant(participant, state.settings, issued_on))
        return certificates

    def html(self, participant_ids) -> str:
        return render_certificates_html(self.build(participant_ids))

    def pdf(self, participant_ids) -> bytes:
        return generate_certificates_pdf(self.build(participant_ids))
