"""Service configuration loaded from the environment."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv
load_dotenv(override=True)


def _build_mongo_uri() -> str:
    """Assemble an Atlas-style URI from credential variables."""
    user = os.getenv("MONGO_USER", "")
    password = os.getenv("MONGO_PSD", "")
    host = os.getenv("MONGO_HOST", "localhost:27017")
    if not user:
        return f"mongodb://{host}/"
    return (
        f"mongodb+srv://{quote_plus(user)}:{quote_plus(password)}@{host}/"
        "?retryWrites=true&w=majority"
    )


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass
class Settings:
    """Service settings"""

    # Server
    host: str = "localhost"
    port: int = 8443
    debug: bool = False
    cert_file: Optional[str] = None
    key_file: Optional[str] = None

    # Storage
    store_backend: str = "mongo"  # mongo / sqlite
    mongo_uri: str = "mongodb://localhost:27017/"
    mongo_database: str = "Timers"
    mongo_collection: str = "UDSF"
    sqlite_path: Path = field(default_factory=lambda: Path.home() / ".timer-registry" / "timers.db")
    # Seconds to wait on a single storage call, None waits forever
    store_timeout: Optional[float] = None

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables"""
        debug = os.getenv("DEBUG", "").lower() in ("1", "true")

        return cls(
            host=os.getenv("HOST", "localhost"),
            port=int(os.getenv("PORT", "8443")),
            debug=debug,
            cert_file=os.getenv("CERTIF_PATH"),
            key_file=os.getenv("KEY_PATH"),

            store_backend=os.getenv("STORE_BACKEND", "mongo").lower(),
            mongo_uri=os.getenv("MONGO_URI") or _build_mongo_uri(),
            mongo_database=os.getenv("MONGO_DATABASE", "Timers"),
            mongo_collection=os.getenv("MONGO_COLLECTION", "UDSF"),
            sqlite_path=Path(os.getenv(
                "SQLITE_PATH", str(Path.home() / ".timer-registry" / "timers.db")
            )).expanduser(),
            store_timeout=_optional_float(os.getenv("STORE_TIMEOUT")),

            log_level=os.getenv("LOG_LEVEL", "DEBUG" if debug else "INFO").upper(),
        )


settings = Settings.from_env()
