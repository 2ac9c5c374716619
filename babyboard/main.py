from __future__ import annotations

import uvicorn

from .api.app import create_app
from .config import Settings, load_settings
from .logging_config import setup_logging


def main() -> int:
    log = setup_logging()
    settings = load_settings()
    if settings.admin_pin == Settings.admin_pin:
        log.warning(
            "ADMIN_PIN is not set, using the default PIN. "
            "Export it in your environment before exposing the dashboard."
        )
    app = create_app(settings)
    log.info("Serving %s on %s:%d", settings.app_title, settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
