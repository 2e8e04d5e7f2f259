DOMAIN = "minimal_http_blinds"

CONF_NAME = "name"
CONF_GET_POSITION_URL = "get_current_position_url"
CONF_SET_POSITION_URL = "set_target_position_url"
CONF_GET_POSITION_METHOD = "get_current_position_method"
CONF_SET_POSITION_METHOD = "set_target_position_method"
CONF_POLLING_MILLIS = "get_current_position_polling_millis"
CONF_TOLERANCE = "current_position_tolerance"
CONF_BATTERY_URL = "get_battery_level_url"
CONF_API_HOST = "api_host"
CONF_API_PORT = "api_port"

DEFAULT_NAME = "Blinds"
DEFAULT_GET_METHOD = "GET"
DEFAULT_SET_METHOD = "POST"
DEFAULT_POLLING_MILLIS = 500
DEFAULT_TOLERANCE = 0
DEFAULT_API_HOST = "0.0.0.0"

HTTP_METHODS = ["GET", "POST", "PUT", "PATCH"]

PLATFORMS = ["cover", "sensor", "binary_sensor"]

# Device HTTP calls
REQUEST_TIMEOUT_SEC = 15.0
POSITION_PLACEHOLDER = "%position%"

# Positions: 100 = fully open, 0 = fully closed
POSITION_OPEN = 100
POSITION_CLOSED = 0

LOW_BATTERY_THRESHOLD = 20
