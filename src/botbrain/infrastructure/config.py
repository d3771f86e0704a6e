from __future__ import annotations

from dataclasses import dataclass, field
import os


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Runtime settings for the decision engine and the tools around it."""

    log_level: str = "INFO"
    default_rating: int = 1200
    exhaustive_mate_search: bool = False
    think_time_min_ms: int = 400
    think_time_max_ms: int = 1800
    seed: int | None = None
    additional: dict[str, str] = field(default_factory=dict)


def load_config(prefix: str = "BOTBRAIN_") -> EngineConfig:
    """Load engine configuration from environment variables."""

    def _get_env(key: str, default: str = "") -> str:
        env_key = f"{prefix}{key}"
        return os.getenv(env_key, default)

    def _parse_int(raw: str, fallback: int | None) -> int | None:
        try:
            return int(raw)
        except (TypeError, ValueError):
            return fallback

    def _parse_bool(raw: str, fallback: bool) -> bool:
        lowered = raw.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
        return fallback

    default_rating = _parse_int(_get_env("DEFAULT_RATING", "1200"), 1200)
    if default_rating is None or default_rating < 0:
        default_rating = 1200

    think_min = _parse_int(_get_env("THINK_TIME_MIN_MS", "400"), 400) or 0
    think_max = _parse_int(_get_env("THINK_TIME_MAX_MS", "1800"), 1800) or 0
    if think_max < think_min:
        think_min, think_max = 400, 1800

    seed_raw = _get_env("SEED", "")
    seed = _parse_int(seed_raw, None) if seed_raw else None

    additional_keys = (
        "LOG_FORMAT",
        "DEFAULT_BOT",
    )
    additional: dict[str, str] = {}
    for key in additional_keys:
        value = _get_env(key, "")
        if value:
            additional[key] = value

    return EngineConfig(
        log_level=_get_env("LOG_LEVEL", "INFO").upper() or "INFO",
        default_rating=default_rating,
        exhaustive_mate_search=_parse_bool(_get_env("EXHAUSTIVE_MATE_SEARCH", "false"), False),
        think_time_min_ms=think_min,
        think_time_max_ms=think_max,
        seed=seed,
        additional=additional,
    )


__all__ = ["EngineConfig", "load_config"]
