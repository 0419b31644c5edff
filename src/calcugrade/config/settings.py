from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


def _float_env(name: str, default: str) -> float:
    return float(os.getenv(name) or default)


@dataclass(frozen=True)
class Settings:
    target_grade: float = _float_env("CALCUGRADE_TARGET_GRADE", "75")
    assumed_finals: float = _float_env("CALCUGRADE_ASSUMED_FINALS", "100")

    webhook_url: str = os.getenv("CALCUGRADE_WEBHOOK_URL", "")
    webhook_timeout: float = _float_env("CALCUGRADE_WEBHOOK_TIMEOUT", "10")

    log_level: str = os.getenv("CALCUGRADE_LOG_LEVEL", "INFO")

    web_mode: bool = os.getenv("CALCUGRADE_WEB", "0") == "1"
    port: int = int(os.getenv("PORT", "8550"))


settings = Settings()
