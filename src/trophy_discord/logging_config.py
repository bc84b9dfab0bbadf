import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from colorama import Fore, Style
from colorama import init as colorama_init

from .config import BOT_TOKEN, LOG_LEVEL, STEAM_API_KEY


class SensitiveDataFilter(logging.Filter):
    """Filter to mask secrets in logs. The Steam key travels in query strings, so aiohttp errors can echo it."""

    def __init__(self, secrets: dict[str, str] | None = None):
        super().__init__()
        if secrets is None:
            secrets = {"BOT_TOKEN": BOT_TOKEN, "STEAM_API_KEY": STEAM_API_KEY}
        self.secrets = {label: value for label, value in secrets.items() if value}

    def filter(self, record):
        def mask(text):
            if isinstance(text, str):
                for label, value in self.secrets.items():
                    if value in text:
                        text = text.replace(value, f"***{label}***")
            return text

        record.msg = mask(record.msg)

        if record.args:
            if isinstance(record.args, tuple):
                record.args = tuple(mask(arg) for arg in record.args)
            elif isinstance(record.args, dict):
                record.args = {k: mask(v) for k, v in record.args.items()}

        return True


class ConsoleNoiseFilter(logging.Filter):
    """Filter to exclude common noise/safe warnings from the console."""

    def filter(self, record):
        msg = str(record.msg)
        if record.name == "discord.gateway" and "heartbeat blocked" in msg:
            return False
        # SQL echo belongs in the file log only
        if record.name.startswith("sqlalchemy.engine") and record.levelno < logging.WARNING:
            return False
        return True


def setup_logging():
    # Force color if requested via environment variable (common in Docker)
    force_color = os.getenv("FORCE_COLOR", "").lower() in ("1", "true")
    colorama_init(autoreset=True, strip=False if force_color else None)

    # Remove existing handlers to ensure our configuration takes precedence
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    sensitive_filter = SensitiveDataFilter()

    # Set root to DEBUG to capture all logs; handlers will filter as needed
    root.setLevel(logging.DEBUG)

    # Console Handler (Colored) - Uses configured LOG_LEVEL
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(LOG_LEVEL)
    console_handler.setFormatter(
        logging.Formatter(
            f"{Fore.CYAN}%(asctime)s{Style.RESET_ALL} | "
            f"{Fore.GREEN}%(levelname)s{Style.RESET_ALL}: "
            f"{Fore.YELLOW}%(name)s{Style.RESET_ALL} - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    console_handler.addFilter(sensitive_filter)
    console_handler.addFilter(ConsoleNoiseFilter())
    root.addHandler(console_handler)

    # File Handler (Plain text, Rotating) - Always DEBUG
    os.makedirs("logs", exist_ok=True)
    file_handler = RotatingFileHandler(
        "logs/trophyhunter.log", maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s: %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    file_handler.addFilter(sensitive_filter)
    root.addHandler(file_handler)


def get_logger(name: str):
    return logging.getLogger(name)
