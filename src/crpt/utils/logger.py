import logging
import sys
import datetime as dt
from pathlib import Path


def resolve_level(level: int | str) -> int:
    """Turn a level name from config (e.g. "debug") into its logging constant."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level}")
    return resolved


class MaxLevelFilter(logging.Filter):
    def __init__(self, max_level):
        super().__init__()
        self.max_level = max_level

    def filter(self, record):
        return record.levelno <= self.max_level


def setup_logger(
    name: str,
    log_dir: str | Path = "data/logs/crpt",
    level: int | str = logging.WARNING,
    log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    daily_rotation: bool = True,
    console_output: bool = False
) -> logging.Logger:
    """
    Setup and configure a logger with file handler and optional console output.

    :param name: Logger name (e.g., 'crpt.submitter')
    :param log_dir: Directory to store log files (default: 'data/logs/crpt')
    :param level: Logging level or level name such as "INFO" (default: logging.WARNING)
    :param log_format: Log message format string
    :param daily_rotation: If True, creates separate log file per day (default: True)
    :param console_output: If True, also outputs INFO logs to console (default: False)

    :return: Configured logger where:
    1. FILE receives logs at `level` and above.
    2. CONSOLE (if enabled) receives ONLY INFO logs (blocks Warnings/Errors).

    Example:
        >>> logger = setup_logger('crpt.submitter', 'data/logs/crpt')
        >>> logger.warning('Remote API returned HTTP 500')

        >>> # With console output enabled
        >>> logger = setup_logger('crpt.api', console_output=True)
        >>> logger.info('Document registered')
    """
    level = resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(log_format)

    if daily_rotation:
        log_date = dt.datetime.now().strftime('%Y-%m-%d')
        log_file = log_path / f"logs_{log_date}.log"
    else:
        log_file = log_path / f"{name.replace('.', '_')}.log"

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        # Keep warnings and errors in the log file only
        console_handler.addFilter(MaxLevelFilter(logging.INFO))
        console_handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(console_handler)

    return logger


class LoggerFactory:
    """
    Factory class for creating loggers with consistent configuration.

    Example:
        >>> factory = LoggerFactory(log_dir='data/logs/crpt', level=logging.INFO)
        >>> submitter_logger = factory.get_logger('crpt.submitter')
        >>> limiter_logger = factory.get_logger('crpt.rate_limiter')
    """

    def __init__(
        self,
        log_dir: str | Path = "data/logs/crpt",
        level: int | str = logging.WARNING,
        log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        daily_rotation: bool = True,
        console_output: bool = False
    ):
        self.log_dir = log_dir
        self.level = level
        self.log_format = log_format
        self.daily_rotation = daily_rotation
        self.console_output = console_output

    def get_logger(self, name: str) -> logging.Logger:
        """
        Create a logger with the factory's configuration.

        :param name: Logger name
        :return: Configured logger instance
        """
        return setup_logger(
            name=name,
            log_dir=self.log_dir,
            level=self.level,
            log_format=self.log_format,
            daily_rotation=self.daily_rotation,
            console_output=self.console_output
        )
