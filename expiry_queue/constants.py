"""Constants used throughout the expiry notifier application."""

# HTTP Headers
REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"
TELEGRAM_SECRET_HEADER = "X-Telegram-Secret"

# Performance Thresholds
SLOW_REQUEST_THRESHOLD = 5.0  # Job endpoints legitimately run for seconds

# Outbound channel rate limiting defaults
DEFAULT_CHANNEL_RATE_LIMIT_REQUESTS = 30  # Requests per caller
DEFAULT_CHANNEL_RATE_LIMIT_WINDOW = 60  # Rolling window in seconds
# Budget for the queue drainer, one send per default SEND_DELAY_MS
DEFAULT_PROCESSOR_RATE_LIMIT_REQUESTS = 600

# Timeout applied to every downstream HTTP call
DEFAULT_DOWNSTREAM_TIMEOUT_SECONDS = 10

# Caller identity the queue drainer uses against the channel rate limiter
QUEUE_PROCESSOR_CALLER = "queue_processor"

# Queue job defaults (overridable through settings.EXPIRY_QUEUE)
DEFAULT_QUEUE_SETTINGS = {
    "DAYS_AHEAD": 7,
    "POPULATE_BATCH_SIZE": 100,
    "PROCESS_BATCH_SIZE": 50,
    "MAX_ITEMS_PER_RUN": 1000,
    "SEND_DELAY_MS": 100,
    "STAGING_RETENTION_DAYS": 7,
    "RETENTION_DAYS": 30,
    "PROCESSED_RETENTION_DAYS": 7,
}

# Upper bound accepted for an explicit populate horizon
MAX_DAYS_AHEAD = 365
