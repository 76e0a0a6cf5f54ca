# Shell name used as prefix for every diagnostic
SHELL_NAME = "lesh"

# Tokenizer / splitter
WHITESPACE_CHARS = (" ", "\t")
COMMAND_SEPARATORS = ("&&", ";")

# Builtin command names
QUIT_COMMANDS = ("exit", "quit")
CHANGE_DIRECTORY_COMMAND = "cd"
CHANGE_TO_LAST_DIRECTORY_COMMAND = "cdl"
DISPLAY_HISTORY_COMMAND = "history"
EXECUTE_HISTORY_COMMAND = "!"

# History
HISTORY_MAX_SIZE = 10          # default capacity
HISTORY_LIMIT = 1000           # largest capacity accepted by --history-size
HISTORY_DEFAULT_DISPLAY_SIZE = 10

# Prompt colors (only used when stdout is a terminal)
DEFAULT_STYLE = "\033[0m"
SHELL_STYLE = "\033[1;34;49m"
USER_STYLE = "\033[1;32;49m"
DIRECTORY_STYLE = "\033[1;34;49m"

# Logging
LOG_LEVEL_ENV = "LESH_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
