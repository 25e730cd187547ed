import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

# Defaults matching config.yaml.example
DEFAULT_CONFIG = {
    'server': {
        'host': '127.0.0.1',
        'port': 3000,
    },
    'store': {
        'lock_timeout': 5.0,  # seconds to wait for the store lock before giving up
    },
    'cors': {
        'allowed_origins': ['*'],
    },
    'rate_limit': {
        'enabled': True,
        'create': '120/minute',
    },
    'metrics': {
        'enabled': True,
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'file': None,
        'max_bytes': 10 * 1024 * 1024,  # 10MB
        'backup_count': 5,
    },
}

# Environment variable -> (section, key, cast)
ENV_OVERRIDES = {
    'HOST': ('server', 'host', str),
    'PORT': ('server', 'port', int),
    'LOG_LEVEL': ('logging', 'level', str),
    'ALLOWED_ORIGINS': ('cors', 'allowed_origins', lambda raw: [o.strip() for o in raw.split(',') if o.strip()]),
}


class Config:
    _instance = None
    _config = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self):
        """Load configuration from config.yaml or fall back to defaults."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        config_path = os.getenv('LAYOUTLENS_CONFIG') or os.path.join(os.getcwd(), 'config.yaml')

        if os.path.exists(config_path):
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    user_config = yaml.safe_load(f)
                    if user_config:
                        self._merge_config(self._config, user_config)
                logger.info(f"Loaded configuration from {config_path}")
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Failed to load {config_path}: {e}. Using defaults.")
        else:
            logger.info("config.yaml not found. Using default configuration.")

        self._apply_env_overrides()

    def _merge_config(self, default, user):
        """Recursively merge dictionary user_config into default_config."""
        for key, value in user.items():
            if isinstance(value, dict) and key in default and isinstance(default[key], dict):
                self._merge_config(default[key], value)
            else:
                default[key] = value

    def _apply_env_overrides(self):
        for env_name, (section, key, cast) in ENV_OVERRIDES.items():
            raw = os.getenv(env_name)
            if raw is None or raw == '':
                continue
            try:
                self._config[section][key] = cast(raw)
            except ValueError:
                logger.error(f"Ignoring invalid value for {env_name}: {raw!r}")

    def reload(self):
        self._load_config()

    def get(self, section, key=None, default=None):
        """
        Get a configuration value.
        Usage: config.get('server', 'port') or config.get('server')
        """
        if section not in self._config:
            return default

        if key is None:
            return self._config[section]

        return self._config[section].get(key, default)

    @property
    def app_env(self):
        return os.getenv('APP_ENV', 'development')


# Global accessor
config = Config()
