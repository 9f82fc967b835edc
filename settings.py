from pathlib import Path
from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Logging
LOG_LEVEL = config.get("LOG_LEVEL", "info")

# Platform endpoints (hardcoded - not user configurable)
PRODUCTION_BASE_URL = "https://api.neonomics.io"
SANDBOX_BASE_URL = "https://sandbox.neonomics.io"

# Which platform environment the default client talks to: "sandbox" or "production"
NEO_ENVIRONMENT = config.get("NEO_ENVIRONMENT", "sandbox")
# Explicit base URL override (empty means: derive from NEO_ENVIRONMENT)
NEO_BASE_URL = config.get("NEO_BASE_URL", "")

# Keycloak realm used by the token endpoint
NEO_AUTH_REALM = config.get("NEO_AUTH_REALM", "sandbox")
TOKEN_PATH_TEMPLATE = "/auth/realms/{realm}/protocol/openid-connect/token"

# Links whose host is this domain (or a subdomain of it) are followed to
# retrieve consent data; anything else is handed to the end-user verbatim
NEO_PLATFORM_DOMAIN = config.get("NEO_PLATFORM_DOMAIN", "neonomics.io")

# Client credentials
NEO_CLIENT_ID = config.get("NEO_CLIENT_ID", "")
NEO_CLIENT_SECRET = config.get("NEO_CLIENT_SECRET", "")

# Default device identifier sent as x-device-id
NEO_DEVICE_ID = config.get("NEO_DEVICE_ID", "neo-python-client")

# Timeout configuration
# Connection timeout: Time to establish TCP connection
CONNECT_TIMEOUT = config.get("CONNECT_TIMEOUT", 10.0)
# Request timeout: Total timeout for a single request
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 30.0)

# Token storage
TOKEN_FILE = config.get("NEO_TOKEN_FILE", str(Path.home() / ".neonomics" / "tokens.json"))


def default_base_url() -> str:
    """Base URL for the configured environment"""
    if NEO_BASE_URL:
        return NEO_BASE_URL.rstrip("/")
    if NEO_ENVIRONMENT.lower() == "production":
        return PRODUCTION_BASE_URL
    return SANDBOX_BASE_URL
