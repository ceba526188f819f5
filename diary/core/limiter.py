"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
CREATE_TOKEN_LIMIT = "10/minute"
TEST_EMAIL_LIMIT = "5/minute"
RECOMMENDATION_LIMIT = "30/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"

limit_create_token = limiter.limit(CREATE_TOKEN_LIMIT)
limit_test_email = limiter.limit(TEST_EMAIL_LIMIT)
limit_recommendations = limiter.limit(RECOMMENDATION_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
