"""
Constants for the Kraken client.
"""

# API Configuration
DEFAULT_BASE_URL = "https://api.kraken.com"
DEFAULT_TIMEOUT = 30.0
API_VERSION = "0"

# Parameter lists
LIST_DELIMITER = ","
NONCE_PARAM = "nonce"

# Authentication headers
API_KEY_HEADER = "API-Key"
API_SIGN_HEADER = "API-Sign"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Connection pool
POOL_LIMIT = 100
POOL_LIMIT_PER_HOST = 20
DNS_CACHE_TTL = 300
USER_AGENT = "kraken-client/1.0"
