"""Config module - loads settings, initializes DB lazily."""

import os

_config = None
_db_initialized = False


def get_config():
    """Load config and initialize DB on first access."""
    global _config, _db_initialized
    if _config is None:
        from fcmaster.settings import load_config
        _config = load_config()
    if not _db_initialized and _config.get('database_url'):
        from storage.database.base import init_db
        os.makedirs(_config['home'], exist_ok=True)
        init_db(_config['database_url'])
        _db_initialized = True
    return _config


def reset_config():
    """Forget loaded settings so the next access re-reads the environment."""
    global _config, _db_initialized
    _config = None
    _db_initialized = False
