"""Settings loaded from the environment (and a .env file, via the CLI group)."""

import os


def _home() -> str:
    return os.path.expanduser(os.getenv("FCM_HOME", "~/.flashcard-master"))


def load_config() -> dict:
    home = _home()
    return {
        "home": home,
        "database_url": os.getenv("FCM_DATABASE_URL") or f"sqlite:///{os.path.join(home, 'flashcards.db')}",
        "session_file": os.path.join(home, "auth.json"),
        "poll_interval": float(os.getenv("FCM_POLL_INTERVAL", "2.0")),
        "log_level": os.getenv("FCM_LOG_LEVEL", "WARNING").upper(),
    }
