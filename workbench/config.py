"""MySQL connection settings.

Settings are looked up in this order:
- environment variables (a ``.env`` file is loaded first)
- Streamlit secrets, ``[mysql]`` section of ``.streamlit/secrets.toml``
"""

import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# .env 파일 로드
load_dotenv()

ENV_KEYS = {
    'host': 'MYSQL_HOST',
    'port': 'MYSQL_PORT',
    'user': 'MYSQL_USER',
    'password': 'MYSQL_PASSWORD',
    'database': 'MYSQL_DATABASE',
}
REQUIRED_KEYS = ('host', 'user', 'database')
DEFAULT_PORT = 3306


def _from_env() -> Dict[str, Any]:
    config = {}
    for key, env_key in ENV_KEYS.items():
        value = os.environ.get(env_key)
        if value:
            config[key] = value
    if 'port' in config:
        config['port'] = int(config['port'])
    return config


def _from_secrets() -> Dict[str, Any]:
    try:
        import streamlit as st
        if hasattr(st, 'secrets') and 'mysql' in st.secrets:
            return dict(st.secrets['mysql'])
    except ImportError:
        pass
    except Exception as e:
        # no secrets.toml outside `streamlit run`; error type varies by version
        logger.debug("Streamlit secrets unavailable: %s", e)
    return {}


def get_mysql_config() -> Dict[str, Any]:
    """Return keyword arguments for ``mysql.connector.connect``.

    Raises:
        ValueError: neither source defines host, user and database.
    """
    config = _from_env()
    if not all(key in config for key in REQUIRED_KEYS):
        secrets = _from_secrets()
        if secrets:
            config = secrets

    missing = [key for key in REQUIRED_KEYS if not config.get(key)]
    if missing:
        env_names = ', '.join(ENV_KEYS[key] for key in missing)
        raise ValueError(
            f"MySQL connection settings are missing ({env_names}). "
            "Set the environment variables or the [mysql] section of Streamlit secrets."
        )

    config.setdefault('port', DEFAULT_PORT)
    return config


def get_log_level() -> str:
    return os.environ.get('WORKBENCH_LOG_LEVEL', 'INFO').upper()
