"""
Logging Configuration
Sets up the global logger for the layout engine.
"""
import logging
import sys
from typing import Optional

# Modules that log on every pointer sample; kept at WARNING unless asked otherwise.
CHATTY_MODULES: tuple[str, ...] = (
    "windowlayout.model.snapping",
    "windowlayout.model.propagation",
    "windowlayout.model.panes",
)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    trace_pointer: bool = False,
) -> logging.Logger:
    """
    Configures the root logger for the 'windowlayout' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        trace_pointer: Keep per-sample snapping/propagation messages at `level`.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("windowlayout")
    logger.setLevel(level)

    # The host may re-initialize the engine; drop handlers from the previous run
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    chatty_level = level if trace_pointer else max(level, logging.WARNING)
    for name in CHATTY_MODULES:
        logging.getLogger(name).setLevel(chatty_level)

    logger.info("Logging initialized.")
    return logger
