# core/constants.py

# --- Store keys (namespaced by settings.EMS_STORAGE_NAMESPACE) ---
KEY_SETTINGS = "settings"
KEY_PARTICIPANTS = "participants"
KEY_USERS = "users"
KEY_SESSION = "session"
KEY_THEME = "theme"

# Version written into every stored envelope. Bare values are version 0.
SCHEMA_VERSION = 1

# Version stamped into JSON exports
EXPORT_VERSION = "1.0"

# --- Participant kinds ---
TYPE_SOLO = "solo"
TYPE_TEAM = "team"
PARTICIPANT_TYPES = (TYPE_SOLO, TYPE_TEAM)

# --- Account roles ---
ROLE_PARTICIPANT = "participant"
ROLE_ADMIN = "admin"
ROLE_CHOICES = (
    (ROLE_PARTICIPANT, "Participant"),
    (ROLE_ADMIN, "Admin"),
)

# --- Theme ---
THEME_LIGHT = "light"
THEME_DARK = "dark"
THEMES = (THEME_LIGHT, THEME_DARK)

# --- Settings defaults ---
FIRST_RUN_EVENT_NAME = "Tech Conference 2024"
RESET_EVENT_NAME = "My Event"
DEFAULT_MIN_TEAM_SIZE = 2
DEFAULT_MAX_TEAM_SIZE = 5

# --- Id prefixes ---
ID_PREFIX_SOLO = "participant"
ID_PREFIX_TEAM = "team"
ID_PREFIX_USER = "user"

# --- User-facing messages ---
MSG_REQUIRED_FIELDS = "Please fill in all required fields."
MSG_LOGIN_REQUIRED_FIELDS = "Please enter both email and password."
MSG_DUPLICATE_ACCOUNT = "An account with this email already exists."
MSG_INVALID_CREDENTIALS = "Invalid email or password. Please try again."
MSG_ACCESS_DENIED = "Access denied. Administrator privileges required."
MSG_INVALID_REGISTRATION = (
    "Please fill all required fields and ensure team size limits are respected."
)
MSG_PARTICIPANT_NOT_FOUND = "No matching participant found."
MSG_INVALID_QR = "Invalid QR code data. Please try again."
MSG_EMPTY_CERT_SELECTION = (
    "Please select at least one participant to generate certificates."
)
MSG_UNREADABLE_IMPORT = "Error reading file. Please make sure it's a valid JSON file."
MSG_INVALID_IMPORT = "Invalid data format. Please check your file."
MSG_CONFIRM_CLEAR = (
    "This will delete ALL data including participants and settings. "
    "Resend with confirm=true to proceed."
)
