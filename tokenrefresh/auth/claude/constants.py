"""Claude OAuth constants."""

CLIENT_ID = "9d1c250a-e61b-44d9-88ed-5944d1962f5e"
TOKEN_URL = "https://console.anthropic.com/v1/oauth/token"

CREDENTIALS_KEY = "claudeAiOauth"
DEFAULT_SCOPES = ("user:inference", "user:profile")

# Refresh one hour before the access token actually expires.
REFRESH_BUFFER_MS = 60 * 60 * 1000
DEFAULT_TIMEOUT_SEC = 30.0

OUTPUT_ENV_VAR = "GITHUB_OUTPUT"
OUTPUT_KEY = "token_refreshed"
