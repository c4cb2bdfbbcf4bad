import os

from rewards.scoring import ParsePolicy

PARSE_ERROR_POLICIES = {
    "zero": ParsePolicy.TREAT_AS_ZERO,
    "reject": ParsePolicy.REJECT,
}


def get_parse_policy() -> ParsePolicy:
    """Return the configured policy for receipt fields that fail to parse."""
    name = os.getenv("PARSE_ERROR_POLICY", "zero").strip().lower()
    if name not in PARSE_ERROR_POLICIES:
        raise ValueError(f"Unknown parse error policy: {name}")
    return PARSE_ERROR_POLICIES[name]


def get_cors_origins() -> list[str]:
    origins = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    return [o.strip() for o in origins if o.strip()]


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
