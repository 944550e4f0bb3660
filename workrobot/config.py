"""Configuration loaded from the environment (and a local .env file)."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

DEFAULT_SEND_GATEWAY = "https://qyapi.weixin.qq.com/cgi-bin/webhook/send"
DEFAULT_UPLOAD_GATEWAY = "https://qyapi.weixin.qq.com/cgi-bin/webhook/upload_media"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_timeout(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        _stderr_print(
            f"Invalid {name}={raw!r}, falling back to {DEFAULT_TIMEOUT_SECONDS}s"
        )
        return DEFAULT_TIMEOUT_SECONDS
    # 0 disables the transport timeout entirely
    return value if value > 0 else None


CONFIG = {
    "key": os.getenv("WORKROBOT_KEY", ""),
    # Overrides the webhook built from the key when set
    "webhook": os.getenv("WORKROBOT_WEBHOOK", ""),
    "upload_gateway": os.getenv("WORKROBOT_UPLOAD_GATEWAY", DEFAULT_UPLOAD_GATEWAY),
    "timeout": _env_timeout("WORKROBOT_TIMEOUT"),
    "verbose": _env_flag("WORKROBOT_VERBOSE"),
}


@dataclass
class RobotConfig:
    """Typed robot configuration."""

    key: str = ""
    webhook: str = ""
    upload_gateway: str = DEFAULT_UPLOAD_GATEWAY
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS
    verbose: bool = False

    @property
    def is_configured(self) -> bool:
        return bool(self.key or self.webhook)

    @classmethod
    def from_env(cls) -> "RobotConfig":
        """Create RobotConfig from environment variables."""
        return cls(
            key=CONFIG["key"],
            webhook=CONFIG["webhook"],
            upload_gateway=CONFIG["upload_gateway"],
            timeout=CONFIG["timeout"],
            verbose=CONFIG["verbose"],
        )
