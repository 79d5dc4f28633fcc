import pytest


@pytest.fixture(autouse=True)
def _clear_postprint_env(monkeypatch):
    for name in (
        "POSTPRINT_BROWSER_EXECUTABLE",
        "PUPPETEER_EXECUTABLE_PATH",
        "POSTPRINT_HEADLESS",
        "POSTPRINT_NAVIGATION_TIMEOUT_MS",
        "POSTPRINT_SELECTOR_TIMEOUT_MS",
        "POSTPRINT_SETTLE_MS",
        "POSTPRINT_HTTP_TIMEOUT",
        "POSTPRINT_DEBUG_SCREENSHOT",
        "POSTPRINT_LOG_LEVEL",
        "POSTPRINT_AUTH_TOKEN",
        "POSTPRINT_CSRF_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
