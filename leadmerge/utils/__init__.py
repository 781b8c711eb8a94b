from .config import (
    ConfigManager,
    ENV_PREFIX
)

from .logging import (
    setup_logging,
    change_log,
    close_handlers,
    JsonFormatter,
    ChangeLogFormatter,
    CHANGE_LOG_NAME
)

__all__ = [
    # Configuration
    'ConfigManager',
    'ENV_PREFIX',
    
    # Logging
    'setup_logging',
    'change_log',
    'close_handlers',
    'JsonFormatter',
    'ChangeLogFormatter',
    'CHANGE_LOG_NAME'
]
