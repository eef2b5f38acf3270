"""
Bot configuration.

Settings are read from the environment (populated from .env by main.py)
into an immutable BotConfig that is passed explicitly to whatever needs it.
"""
import os
from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional

from update_handler.exceptions import ConfigurationError

DEFAULT_API_BASE_URL = "https://api.telegram.org"
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0

TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class BotConfig:
    """Settings for one webhook request."""
    telegram_bot_token: str
    allowed_user_ids: FrozenSet[int] = field(default_factory=frozenset)
    webhook_secret: Optional[str] = None
    telegram_api_base_url: str = DEFAULT_API_BASE_URL
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    dedup_updates: bool = False

    def __repr__(self) -> str:
        # Keep token and secret out of logs and tracebacks
        return (
            f"BotConfig(allowed_user_ids={sorted(self.allowed_user_ids)}, "
            f"webhook_secret={'set' if self.webhook_secret else 'unset'}, "
            f"telegram_api_base_url={self.telegram_api_base_url!r}, "
            f"http_timeout_seconds={self.http_timeout_seconds}, "
            f"dedup_updates={self.dedup_updates})"
        )


def parse_allowed_ids(raw: Optional[str]) -> FrozenSet[int]:
    """
    Parse a comma-separated list of numeric Telegram user ids.

    Blank entries are ignored.

    Raises:
        ConfigurationError: If an entry is not an integer
    """
    if not raw:
        return frozenset()

    ids = set()
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.add(int(part))
        except ValueError:
            raise ConfigurationError(
                f"ALLOWED_USER_IDS contains a non-numeric id: {part!r}",
                config_key="ALLOWED_USER_IDS"
            )
    return frozenset(ids)


def _env_float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}", config_key=key)


def load_config(environ: Optional[Mapping[str, str]] = None) -> BotConfig:
    """
    Build a BotConfig from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        BotConfig

    Raises:
        ConfigurationError: If TELEGRAM_BOT_TOKEN is missing or a value is malformed
    """
    env = os.environ if environ is None else environ

    token = (env.get("TELEGRAM_BOT_TOKEN") or "").strip()
    if not token:
        raise ConfigurationError(
            "Missing required env var: TELEGRAM_BOT_TOKEN",
            config_key="TELEGRAM_BOT_TOKEN"
        )

    return BotConfig(
        telegram_bot_token=token,
        allowed_user_ids=parse_allowed_ids(env.get("ALLOWED_USER_IDS")),
        webhook_secret=env.get("WEBHOOK_SECRET") or None,
        telegram_api_base_url=(env.get("TELEGRAM_API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/"),
        http_timeout_seconds=_env_float(env, "HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS),
        dedup_updates=(env.get("DEDUP_UPDATES") or "").strip().lower() in TRUE_VALUES,
    )
