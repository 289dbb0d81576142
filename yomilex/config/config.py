# yomilex/config/config.py
import configparser
import logging
import os

logger = logging.getLogger(__name__)

APP_NAME = "yomilex"
APP_VERSION = "v.0.1.0"
MAX_SCAN_LENGTH = 24
UNCONFIGURED_PRIORITY = 999
CONFIG_ENV_VAR = "YOMILEX_CONFIG"


def config_path() -> str:
    return os.environ.get(CONFIG_ENV_VAR, 'config.ini')


class Config:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        self._load()

    def _load(self):
        config = configparser.ConfigParser()

        # Step 1: Set hardcoded defaults
        defaults = {
            'Settings': {
                'language': 'ja',
                'store_path': 'terms.marisa',
                'dictionaries_path': 'dictionaries.ini',
                'log_level': 'INFO'
            },
            'Lookup': {
                'group_results': 'true'
            }
        }
        config.read_dict(defaults)

        # Step 2: Overlay config.ini when present
        self.path = config_path()
        try:
            if config.read(self.path, encoding='utf-8'):
                logger.info(f"Loaded settings from {self.path}.")
            else:
                logger.debug(f"{self.path} not found, using default settings.")
        except configparser.Error as e:
            logger.warning(f"Warning: Could not parse {self.path}. Using defaults. Error: {e}")
            config = configparser.ConfigParser()
            config.read_dict(defaults)

        self.language = config.get('Settings', 'language')
        self.store_path = config.get('Settings', 'store_path')
        self.dictionaries_path = config.get('Settings', 'dictionaries_path')
        self.log_level = config.get('Settings', 'log_level')
        try:
            self.group_results = config.getboolean('Lookup', 'group_results')
        except ValueError:
            logger.warning("Invalid group_results value, falling back to true.")
            self.group_results = True

    def reload(self):
        self._load()

    def save(self):
        config = configparser.ConfigParser()
        config['Settings'] = {
            'language': self.language,
            'store_path': self.store_path,
            'dictionaries_path': self.dictionaries_path,
            'log_level': self.log_level
        }
        config['Lookup'] = {
            'group_results': str(self.group_results).lower()
        }
        with open(self.path, 'w', encoding='utf-8') as configfile:
            config.write(configfile)
        logger.info(f"Settings saved to {self.path}.")

# The singleton instance
config = Config()
