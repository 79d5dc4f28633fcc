"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass
from typing import Optional


USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


def _parse_number(name: str, default, cast=int):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return cast(value)
    except ValueError:
        raise ValueError(f"{name} must be a number if set") from None


@dataclass
class Settings:
    """Browser, HTTP and logging settings."""

    browser_executable: Optional[str] = None
    headless: bool = True
    navigation_timeout_ms: int = 30000
    selector_timeout_ms: int = 20000
    settle_ms: int = 3000
    http_timeout: float = 30.0
    debug_screenshot: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            browser_executable=(
                os.getenv("POSTPRINT_BROWSER_EXECUTABLE")
                or os.getenv("PUPPETEER_EXECUTABLE_PATH")
                or None
            ),
            headless=_parse_bool(os.getenv("POSTPRINT_HEADLESS"), default=True),
            navigation_timeout_ms=_parse_number("POSTPRINT_NAVIGATION_TIMEOUT_MS", 30000),
            selector_timeout_ms=_parse_number("POSTPRINT_SELECTOR_TIMEOUT_MS", 20000),
            settle_ms=_parse_number("POSTPRINT_SETTLE_MS", 3000),
            http_timeout=_parse_number("POSTPRINT_HTTP_TIMEOUT", 30.0, cast=float),
            debug_screenshot=os.getenv("POSTPRINT_DEBUG_SCREENSHOT") or None,
            log_level=os.getenv("POSTPRINT_LOG_LEVEL", "INFO"),
        )
