import json

from django.test import SimpleTestCase

from core.constants import MSG_EMPTY_CERT_SELECTION, MSG_INVALID_QR
from core.exceptions import InvalidQRPayload, ParticipantNotFound, ValidationFailed
from core.state import StateRepository
from core.tests.helpers import TempStoreMixin
from events.certificate_generator import CertificateService, render_certificates_html
from events.qr import decode_payload, make_qr_data_uri, make_qr_png
from events.services import ParticipantService, SettingsService

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class QRCheckInTests(TempStoreMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        SettingsService().apply({"eventName": "Hack Night", "eventDate": "2024-06-01"})
        self.service = ParticipantService()
        self.participant = self.service.register({"type": "solo", "name": "Ada"})

    def test_payload_shape(self):
        payload = json.loads(self.service.qr_payload(self.participant.id))

        self.assertEqual(payload, {
            "id": self.participant.id,
            "type": "solo",
            "name": "Ada",
            "event": "Hack Night",
        })

    def test_check_in_marks_present(self):
        payload = self.service.qr_payload(self.participant.id)

        checked_in = self.service.check_in(payload)

        self.assertTrue(checked_in.present)
        self.assertTrue(self.service.get(self.participant.id).present)

    def test_check_in_is_idempotent(self):
        payload = self.service.qr_payload(self.participant.id)
        self.service.check_in(payload)

        self.assertTrue(self.service.check_in(payload).present)

    def test_malformed_payloads(self):
        for text in ["", "not json", "[1, 2]", '{"name": "Ada"}', '{"id": 42}']:
            with self.subTest(text=text):
                with self.assertRaisesMessage(InvalidQRPayload, MSG_INVALID_QR):
                    decode_payload(text)

    def test_unknown_id(self):
        with self.assertRaises(ParticipantNotFound):
            self.service.check_in(json.dumps({"id": "participant_0_missing"}))

    def test_png_and_data_uri(self):
        payload = self.service.qr_payload(self.participant.id)

        self.assertTrue(make_qr_png(payload).startswith(PNG_SIGNATURE))
        self.assertTrue(make_qr_data_uri(payload).startswith("data:image/png;base64,"))


class CertificateTests(TempStoreMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        SettingsService().apply({
            "eventName": "Hack Night",
            "eventDate": "2024-06-01",
            "minTeamSize": "1",
            "maxTeamSize": "3",
        })
        self.service = ParticipantService()
        self.solo = self.service.register({"type": "solo", "name": "<b>Ada</b>"})
        self.team = self.service.register({
            "type": "team",
            "teamName": "Byte Club",
            "members": [{"name": "Tom"}, {"name": "Jerry"}],
        })
        self.certificates = CertificateService(StateRepository())

    def test_empty_selection_is_rejected(self):
        with self.assertRaisesMessage(ValidationFailed, MSG_EMPTY_CERT_SELECTION):
            self.certificates.build([])

    def test_unknown_ids_are_skipped(self):
        certs = self.certificates.build([self.team.id, "participant_0_missing", self.solo.id])

        self.assertEqual([c.recipient for c in certs], ["Byte Club", "<b>Ada</b>"])
        self.assertEqual(certs[0].members, ["Tom", "Jerry"])
        self.assertEqual(certs[1].members, [])

    def test_html_escapes_names(self):
        html = self.certificates.html([self.solo.id, self.team.id])

        self.assertIn("&lt;b&gt;Ada&lt;/b&gt;", html)
        self.assertNotIn("<b>Ada</b>", html)
        self.assertIn("Team Members: Tom, Jerry", html)
        self.assertIn("Hack Night", html)
        self.assertEqual(html.count('class="certificate"'), 2)

    def test_html_for_no_certificates(self):
        self.assertIn("print-area", render_certificates_html([]))

    def test_pdf(self):
        pdf = self.certificates.pdf([self.solo.id, self.team.id])

        self.assertTrue(pdf.startswith(b"%PDF"))
