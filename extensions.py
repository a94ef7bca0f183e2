from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Storage comes from RATELIMIT_STORAGE_URI, set in main.create_app from REDIS_URL.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per day", "300 per hour"]
)

# Applied to the Gemini-backed endpoints.
AI_RATE_LIMIT = "20 per minute"
