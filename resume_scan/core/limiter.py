from slowapi import Limiter
from slowapi.util import get_remote_address

from resume_scan.core.config import settings

# Shared limiter instance; attached to app.state in main.py
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
