"""Runtime configuration read from the environment."""
import os

_DEFAULT_DB_URL = "sqlite:///./borsa.db"

DATABASE_URL = os.getenv("DATABASE_URL", _DEFAULT_DB_URL)
SQL_ECHO = os.getenv("SQL_ECHO", "0") == "1"

COINGECKO_API_KEY = os.getenv("COINGECKO_API_KEY")

SECRET_KEY = os.getenv("BORSA_SECRET_KEY", "change-me-in-production")
TOKEN_ALGORITHM = "HS256"
TOKEN_TTL_MINUTES = int(os.getenv("BORSA_TOKEN_TTL_MINUTES", str(7 * 24 * 60)))
RESET_CODE_TTL_MINUTES = int(os.getenv("BORSA_RESET_CODE_TTL_MINUTES", "15"))

# Upstream calls have no timeout of their own; a timeout counts as a failed fetch.
HTTP_TIMEOUT_SECONDS = float(os.getenv("BORSA_HTTP_TIMEOUT", "12"))

PLAN_DURATION_DAYS = int(os.getenv("BORSA_PLAN_DURATION_DAYS", "30"))

PRICE_POLL_SECONDS = float(os.getenv("BORSA_PRICE_POLL_SECONDS", "10"))
CATEGORY_POLL_SECONDS = float(os.getenv("BORSA_CATEGORY_POLL_SECONDS", "60"))
NEWS_POLL_SECONDS = float(os.getenv("BORSA_NEWS_POLL_SECONDS", "300"))

LOG_LEVEL = os.getenv("BORSA_LOG_LEVEL", "INFO")
