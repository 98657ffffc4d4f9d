"""
Per-client rate limiting for generation endpoints.

Every route that triggers a provider call is decorated with
`@limiter.limit(GENERATION_LIMIT)`; exceeding it returns 429 through
slowapi's handler registered in main.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from career_coach.config import get_settings

limiter = Limiter(key_func=get_remote_address)

GENERATION_LIMIT = get_settings().generation_rate_limit
