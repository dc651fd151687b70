import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    database_url: Optional[str] = None
    database_name: str = "pet24"
    database_timeout_ms: int = 5000
    jwt_secret: str = "dev-secret-change"
    data_dir: Path = Path("data")
    read_only: bool = False
    environment: str = "development"

    @property
    def mongo_enabled(self) -> bool:
        return bool(self.database_url)

    @property
    def secure_cookies(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL") or None,
            database_name=os.getenv("DATABASE_NAME", "pet24"),
            database_timeout_ms=int(os.getenv("DATABASE_TIMEOUT_MS", "5000")),
            jwt_secret=os.getenv("JWT_SECRET", "dev-secret-change"),
            data_dir=Path(os.getenv("DATA_DIR", os.path.join(os.getcwd(), "data"))),
            read_only=_flag(os.getenv("DATA_READ_ONLY")),
            environment=os.getenv("APP_ENV", "development"),
        )
