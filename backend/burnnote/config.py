# burnnote/config.py

import os

# =========================
# PUBLIC LINKS
# =========================

# Origin + base path of the frontend that renders "#/note/<id>" routes
PUBLIC_BASE_URL = os.getenv("BURNNOTE_PUBLIC_URL", "http://localhost:5173")

# =========================
# NOTE LIFECYCLE
# =========================

RETENTION_DAYS = int(os.getenv("BURNNOTE_RETENTION_DAYS", "7"))
PURGE_DELAY_SECONDS = float(os.getenv("BURNNOTE_PURGE_DELAY_SECONDS", "60"))
MIN_PASSWORD_LENGTH = int(os.getenv("BURNNOTE_MIN_PASSWORD_LENGTH", "4"))

# =========================
# CRYPTO
# =========================

KDF_ITERATIONS = int(os.getenv("BURNNOTE_KDF_ITERATIONS", "390000"))

# =========================
# API
# =========================

UNLOCK_RATE_LIMIT = os.getenv("BURNNOTE_UNLOCK_RATE_LIMIT", "10/minute")
LOG_LEVEL = os.getenv("BURNNOTE_LOG_LEVEL", "INFO")
