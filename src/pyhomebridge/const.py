"""Constants for pyhomebridge."""

# Default bridge address used by the examples
DEFAULT_HOST = "http://localhost:8080"

# API Endpoints
ACCESSORIES_ENDPOINT = "/accessory"
ACCESSORY_ENDPOINT = "/accessory/{accessory_id}"
ACCESSORY_STATE_ENDPOINT = "/accessory/{accessory_id}/state"

# HTTP status the bridge uses for an unknown accessory
STATUS_NOT_FOUND = 404

CONTENT_TYPE_JSON = "application/json; charset=utf-8"
