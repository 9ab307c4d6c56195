"""Application constants."""

# RPE scale (rate of perceived exertion)
RPE_MIN = 1
RPE_MAX = 10

# Session timer
DEFAULT_TIMER_SECONDS = 30 * 60

# Earnings (per completed session)
DEFAULT_RATE_PER_SESSION = 30.0

# Calendar
BOOKING_REQUEST_EXPIRY_DAYS = 7
SERVICE_DURATIONS = (30, 45, 60, 75, 90)
GROUP_MAX_CAPACITY = 5

# AI program generation
PROMPT_VERSION = "v1.0.0"
MAX_PROMPT_EXERCISES = 100
MIN_EXERCISES_PER_SESSION = 4
MAX_PROGRAM_WEEKS = 52
MAX_SESSIONS_PER_WEEK = 7
SINGLE_CHUNK_MAX_WEEKS = 3
CHUNK_WEEKS = 2
CHUNK_MIN_TOKENS = 10000
CHUNK_MAX_TOKENS = 16384
CONTEXT_WEEKS = 2
