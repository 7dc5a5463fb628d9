from .participants import (
    ParticipantListCreateView,
    ParticipantDetailView,
    ParticipantFormView,
    ParticipantEditFormView,
    ToggleAttendanceView,
)
from .scan import ScanQRView, ParticipantQRView, ParticipantQRImageView
from .certificates import CertificatesView
from .exports import ExportCSVView, ExportJSONView, ImportJSONView, ClearDataView
from .settings import EventSettingsView
from .dashboard import AdminDashboardView
