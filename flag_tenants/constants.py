"""
Constants for the feature-flag tenant editor.

Defaults for the remote service; every value here can be overridden through
config.yaml or FLAG_TENANTS_* environment variables.
"""

# Base URLs (login lives under the public prefix)
DEFAULT_PUBLIC_BASE_URL = "https://qa-automation.armorcode.ai/public"
DEFAULT_BASE_URL = "https://qa-automation.armorcode.ai"

# API Endpoints
LOGIN_ENDPOINT = "/login"
FEATURE_FLAG_ENDPOINT = "/api/super-admin/feature-flag"
LOGOUT_ENDPOINT = "/logout"

# Session
SESSION_COOKIE_NAME = "SESSION"
CSRF_TOKEN_HEADER = "X-CSRF-Token"
CSRF_TOKEN_BODY_FIELD = "csrfToken"

# Timeouts
DEFAULT_API_TIMEOUT = 30  # seconds

# Feature flag fields kept in the local projection, in serialization order
FEATURE_FLAG_FIELDS = (
    "name",
    "comments",
    "tenants",
    "gaStatus",
    "section",
    "status",
    "ticketLink",
)
TENANTS_FIELD = "tenants"

USAGE = "Usage: flag-tenants <tenantIds> <function> <email> <password> <flagName>"

# Tenant IDs are signed 32-bit integers
TENANT_ID_MIN = -(2 ** 31)
TENANT_ID_MAX = 2 ** 31 - 1
