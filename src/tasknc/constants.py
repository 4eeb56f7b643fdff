from pathlib import Path

# Defaults for a freshly constructed settings store
DEFAULT_DEBUG = False
DEFAULT_NC_TIMEOUT = 1000  # milliseconds
DEFAULT_FILTER = "status:pending"
DEFAULT_SORT = "n"
DEFAULT_TASK_FORMAT = "%3n (%-10p) %d"

# Environment variable pointing at a config file
ENV_CONFIG_VAR = "TASKNC_CONFIG"

# Searched in order when no explicit config path is given
DEFAULT_CONFIG_PATHS: list[Path] = [
    Path("~/.tasknc/config").expanduser(),
    Path("~/.config/tasknc/config").expanduser(),
]

# Command used to query the installed taskwarrior version
TASK_VERSION_COMMAND: list[str] = ["task", "--version"]
TASK_VERSION_TIMEOUT = 2.0  # seconds

# Variable names accepted by `set` lines, matched case-sensitively
KEY_NC_TIMEOUT = "nc_timeout"
KEY_LOGPATH = "logpath"
KEY_FILTER = "filter"
KEY_SORT = "sort"
KEY_TASK_FORMAT = "task_format"
RECOGNIZED_KEYS: tuple[str, ...] = (
    KEY_NC_TIMEOUT,
    KEY_LOGPATH,
    KEY_FILTER,
    KEY_SORT,
    KEY_TASK_FORMAT,
)
