# events/qr.py
"""
Check-in QR codes.

The payload is a small JSON object: {"id", "type", "name", "event"}. It is
printed into a QR image for the participant and pasted back (as text) at
the desk to check them in.
"""
import base64
import io
import json

import qrcode

from core.exceptions import InvalidQRPayload
from core.records import EventSettings, Participant


def build_payload(participant: Participant, settings: EventSettings) -> str:
    return json.dumps({
        "id": participant.id,
        "type": participant.type,
        "name": participant.label,
        "event": settings.event_name,
    })


def decode_payload(text) -> dict:
    """
    Parse pasted QR text. Raises InvalidQRPayload unless it is a JSON
    object carrying a non-empty string id.
    """
    if not text:
        raise InvalidQRPayload()
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        raise InvalidQRPayload()

    if not isinstance(data, dict):
        raise InvalidQRPayload()
    participant_id = data.get("id")
    if not isinstance(participant_id, str) or not participant_id:
        raise InvalidQRPayload()
    return data


def make_qr_png(payload: str) -> bytes:
    """
    Render ``payload`` as a PNG QR code (high error correction).
    """
    qr = qrcode.QRCode(
        version=None,  # grow to fit the payload
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=8,
        border=4,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def make_qr_data_uri(payload: str) -> str:
    img_base64 = base64.b64encode(make_qr_png(payload)).decode("utf-8")
    return f"data:image/png;base64,{img_base64}"
