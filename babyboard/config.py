import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    admin_pin: str = "2026"
    app_title: str = "👶 Baby-Dashboard"
    due_date: str = "2026-08-20T00:00:00"
    data_dir: str = "data"
    static_dir: str = "public"
    host: str = "0.0.0.0"
    port: int = 3000
    # Requests per client address within ``rate_limit_window`` seconds
    rate_limit_max: int = 100
    rate_limit_window: int = 15 * 60
    # Set when running behind exactly one reverse proxy (e.g. Cloudflare)
    trust_proxy: bool = True
    json_body_limit: int = 100 * 1024
    offers_body_limit: int = 10 * 1024 * 1024

    @property
    def names_path(self) -> Path:
        return Path(self.data_dir) / "names.json"

    @property
    def wishlist_path(self) -> Path:
        return Path(self.data_dir) / "wishlist.json"

    @property
    def bets_path(self) -> Path:
        return Path(self.data_dir) / "bets.json"

    @property
    def offers_path(self) -> Path:
        return Path(self.data_dir) / "offers.json"

    @property
    def uploads_dir(self) -> Path:
        return Path(self.data_dir) / "uploads"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def load_settings() -> Settings:
    defaults = Settings()
    return Settings(
        admin_pin=os.getenv("ADMIN_PIN", "").strip() or defaults.admin_pin,
        app_title=os.getenv("APP_TITLE") or defaults.app_title,
        due_date=os.getenv("DUE_DATE") or defaults.due_date,
        data_dir=os.getenv("DATA_DIR") or defaults.data_dir,
        static_dir=os.getenv("STATIC_DIR") or defaults.static_dir,
        host=os.getenv("HOST") or defaults.host,
        port=_int_env("PORT", defaults.port),
        rate_limit_max=_int_env("RATE_LIMIT_MAX", defaults.rate_limit_max),
        rate_limit_window=_int_env("RATE_LIMIT_WINDOW", defaults.rate_limit_window),
        trust_proxy=os.getenv("TRUST_PROXY", "1").strip().lower()
        not in {"0", "false", "no"},
    )
