DOMAIN = "guardtrack"
VERSION = "0.3.0"

# Config entry keys
CONF_ENTRY_NAME = "entry_name"
CONF_BASE_URL = "base_url"
CONF_EMAIL = "email"
CONF_PASSWORD = "password"
CONF_DEVICE_ID = "device_id"
CONF_GUID = "guid"

DEFAULT_BASE_URL = "https://api.guardtrack.io/api/v1"

# Polling
POLL_INTERVAL = 10  # seconds between scheduled status + alerts fetches

# Alert history window
ALERTS_PAGE_SIZE = 5

# Command vocabulary (case-sensitive, the dispatcher accepts any string)
COMMAND_ARM = "ARM"
COMMAND_DISARM = "DISARM"
COMMAND_BUZZ = "BUZZ"
COMMAND_REQUEST_POSITION = "REQUEST_POSITION"
ARM_COMMANDS = (COMMAND_ARM, COMMAND_DISARM)

# Reported device status that counts as armed (exact match)
STATUS_ARMED = "ARMED"

# HTTP
REQUEST_TIMEOUT = 10  # seconds, multiplied by attempt number for each retry
REQUEST_ATTEMPTS = 3  # retries happen on timeouts only
HTTP_UNAUTHORIZED = 401

# User-facing messages
MESSAGE_MISSING_DEVICE_ID = "Device ID is missing."
MESSAGE_FETCH_FAILED = "Failed to load device data. Please try again."
MESSAGE_COMMAND_FAILED = "Failed to send command"
MESSAGE_COMMAND_SENT = 'Command "{command}" sent successfully'
MESSAGE_COMMAND_BUSY = 'Command "{busy}" is still in progress, "{command}" was not sent'
