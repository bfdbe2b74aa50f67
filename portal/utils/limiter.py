import os

from slowapi import Limiter
from slowapi.util import get_remote_address

# Per-IP limits on the login, OTP and registration endpoints. Counters are
# process-local unless RATE_LIMIT_STORAGE_URI points at a shared store
# (e.g. redis://host:6379).
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=os.getenv("RATE_LIMIT_STORAGE_URI", "memory://"),
)
