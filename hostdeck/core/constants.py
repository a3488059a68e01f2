"""
Project constants definitions
"""

# ============================================================
# Application
# ============================================================

APP_NAME = "hostdeck"
CONFIG_FILE_NAME = "config.json"
CONFIG_VERSION = 1
LOG_FILE_NAME = "hostdeck.log"

# ============================================================
# Secret Store
# ============================================================

KEYRING_SERVICE = "hostdeck"

# ============================================================
# Default Values
# ============================================================

DEFAULT_SSH_PORT = 22
MIN_PORT = 1
MAX_PORT = 65535
DEFAULT_SSH_TIMEOUT = 10
DEFAULT_EDITOR = "nvim"
FALLBACK_EDITOR = "nano"
DEFAULT_DOWNLOADS_DIR = "~/Downloads"
DEFAULT_TERM = "xterm-256color"
DEFAULT_TERM_SIZE = (80, 24)

# ============================================================
# Remote Browser
# ============================================================

HIDDEN_MARKER = "."
ROOT_PATH = "/"
# Header, path bar, column titles, footer and the message line
BROWSER_RESERVED_LINES = 14
MIN_VISIBLE_ROWS = 1

# ============================================================
# Environment
# ============================================================

ENV_PREFIX = "HOSTDECK_"
EDITOR_ENV = "EDITOR"
