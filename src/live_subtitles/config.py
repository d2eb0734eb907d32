from dataclasses import dataclass
import os
from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str, default: str) -> int | None:
    value = os.getenv(name, default).strip()
    return int(value) if value else None


def _optional_float(name: str) -> float | None:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


@dataclass
class Config:
    # --- Transcription backend ---
    server_url: str = os.getenv("TRANSCRIPTION_SERVER_URL", "http://localhost:8080")
    request_timeout_s: float | None = _optional_float("REQUEST_TIMEOUT_S")  # None = wait forever, like requests
    channel_name: str = os.getenv("CHANNEL_NAME", "test")

    # uid the backend gives its transcription bot; empty BOT_UID shows everyone
    bot_uid: int | None = _optional_int("BOT_UID", "101")

    # --- Logging ---
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # --- Output ---
    vtt_path: str = "live.vtt"
    vtt_update_interval_s: float = 0.3
    overlay_enabled: bool = True
    terminal_output: bool = True
    terminal_poll_interval_s: float = 0.1

    # --- Hotkeys ---
    hotkey_toggle: str = os.getenv("HOTKEY_TOGGLE", "f8")
    hotkey_stop: str = os.getenv("HOTKEY_STOP", "f10")

# Global instance
cfg = Config()
