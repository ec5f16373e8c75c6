"""
WCLI Constants

Centralized constants for magic values, defaults, and configuration.
"""

VERSION = "1.0.0"
TITLE = "WCLI 2025"
WEBSITE = "https://github.com/Taghunter98/wcli.git"

# Credential file keys
KEY_PASSWORD = "PASS"
KEY_HOST = "EC2"
KEY_PEM = "PEM"
REQUIRED_KEYS = [KEY_PASSWORD, KEY_HOST, KEY_PEM]

# Credential file search order
ENV_FILE_NAME = ".env"
USER_CONFIG_DIR = "~/.wcli"

# SSH Timeout Configuration
DEFAULT_COMMAND_TIMEOUT = 60.0
DEFAULT_CONNECT_TIMEOUT = 10.0
CHANNEL_POLL_INTERVAL = 0.02
CHANNEL_READ_SIZE = 32768

# Connection probe
PROBE_COMMAND = "echo test"

# Runtime tuning (environment variables)
ENV_TIMEOUT = "WCLI_TIMEOUT"
ENV_CONNECT_TIMEOUT = "WCLI_CONNECT_TIMEOUT"
ENV_LOG_DIR = "WCLI_LOG_DIR"
ENV_VERBOSE = "WCLI_VERBOSE"

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"
CONNECTED_DATE_FORMAT = "%a %b %d at %H:%M:%S"

# Remote tools
SQL_CLIENT = "mariadb"
SQL_USER = "root"
PACKAGE_MANAGER = "yum"
TEST_RUNNER = "python3 -m unittest discover"

# Prompts
ROOT_PROMPT = "[{user}@wcli ~]$ "
MODE_PROMPT = ">>> "
FALLBACK_USER = "user"

# Exit codes
EXIT_OK = 0
EXIT_CONNECT_FAILED = 1
EXIT_CONFIG_INVALID = 2
EXIT_INTERRUPTED = 130
