# burnnote/core/rate_limit.py

from slowapi import Limiter
from slowapi.util import get_remote_address

from burnnote.config import UNLOCK_RATE_LIMIT

# Keyed by client address; storage is in-process memory
limiter = Limiter(key_func=get_remote_address)

# Password guesses per client per window
UNLOCK_LIMIT = UNLOCK_RATE_LIMIT
