# Colored logging for optimization runs
# Author: Shengning Wang

import sys
import logging

from tqdm.auto import tqdm


class TqdmStreamHandler(logging.StreamHandler):
    """
    StreamHandler that writes records through tqdm.write().

    Log lines emitted while a generation progress bar is active are printed
    above the bar instead of tearing it apart.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=self.stream)
            self.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


class HueLogger:
    """
    Colored logger shared by the optimizer, the benchmark registry and the CLI.

    The handler list is cleared on construction, so re-importing the module in an
    interactive session does not duplicate every log line.

    Attributes:
        logger (logging.Logger): The configured logger instance.
    """

    # ANSI Color Codes
    b = "\033[1;34m"    # major key/parameter:      bold blue
    c = "\033[1;36m"    # minor key/parameter:      bold cyan
    m = "\033[1;35m"    # value/reading:            bold magenta
    y = "\033[1;33m"    # warning/highlighting:     bold yellow
    g = "\033[1;32m"    # success/save:             bold green
    r = "\033[1;31m"    # error/critical:           bold red

    q = "\033[0m"      # quit/reset

    def __init__(self, name: str = "diffevo", level: int = logging.INFO) -> None:
        """
        Args:
            name (str): Logger name.
            level (int): Logging level (e.g., logging.INFO, logging.DEBUG).
        """
        self.logger: logging.Logger = logging.getLogger(name)
        self.logger.setLevel(level)

        # the root logger must not print optimizer lines a second time
        self.logger.propagate = False

        if self.logger.hasHandlers():
            self.logger.handlers.clear()

        self.logger.addHandler(self._get_handler())

    def _get_handler(self) -> logging.StreamHandler:
        """
        Builds the stdout handler with a gray timestamp and a blue level name.

        Returns:
            logging.StreamHandler: Handler routed through tqdm.
        """
        log_format: str = f"\033[90m%(asctime)s{self.q} - {self.b}%(levelname)s{self.q} - %(message)s"
        formatter: logging.Formatter = logging.Formatter(log_format, "%H:%M:%S")

        handler: logging.StreamHandler = TqdmStreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        return handler

    def set_level(self, level: int) -> None:
        """Changes the verbosity of the shared logger, e.g. logging.DEBUG for strategy tracing."""
        self.logger.setLevel(level)


hue = HueLogger()
logger: logging.Logger = hue.logger
