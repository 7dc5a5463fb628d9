from django.urls import path
from .views import (
    ParticipantListCreateView,
    ParticipantDetailView,
    ParticipantFormView,
    ParticipantEditFormView,
    ToggleAttendanceView,
    ScanQRView,
    ParticipantQRView,
    ParticipantQRImageView,
    CertificatesView,
    ExportCSVView,
    ExportJSONView,
    ImportJSONView,
    ClearDataView,
    EventSettingsView,
    AdminDashboardView,
)

urlpatterns = [
    path("participants/", ParticipantListCreateView.as_view(), name="participant-list"),
    path("participants/form/", ParticipantFormView.as_view(), name="participant-form"),
    path("participants/<str:participant_id>/", ParticipantDetailView.as_view(), name="participant-detail"),
    path(
        "participants/<str:participant_id>/form/",
        ParticipantEditFormView.as_view(),
        name="participant-edit-form",
    ),
    path(
        "participants/<str:participant_id>/toggle/",
        ToggleAttendanceView.as_view(),
        name="participant-toggle",
    ),
    path("participants/<str:participant_id>/qr/", ParticipantQRView.as_view(), name="participant-qr"),
    path(
        "participants/<str:participant_id>/qr.png",
        ParticipantQRImageView.as_view(),
        name="participant-qr-image",
    ),

    path("scan/", ScanQRView.as_view(), name="scan-qr"),
    path("certificates/", CertificatesView.as_view(), name="certificates"),

    path("export/csv/", ExportCSVView.as_view(), name="export-csv"),
    path("export/json/", ExportJSONView.as_view(), name="export-json"),
    path("import/", ImportJSONView.as_view(), name="import-json"),
    path("clear/", ClearDataView.as_view(), name="clear-data"),

    path("settings/", EventSettingsView.as_view(), name="event-settings"),
    path("dashboard/", AdminDashboardView.as_view(), name="admin-dashboard"),
]
