import logging

from stop_rules.logging_handlers import build_handlers


def setup_logger(name, debug=False, verbose=True):
    """
    Setup a module logger with the shared stop-rule format.

    Handlers are attached once per name and the logger does not propagate to
    the root logger. A later debug=True call still lowers the level to DEBUG.

    Args:
        name: Logger name (typically __name__)
        debug: Enable debug level logging
        verbose: Enable console/file output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        if debug and logger.level > logging.DEBUG:
            logger.setLevel(logging.DEBUG)
        return logger

    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    logger.propagate = False

    handlers = build_handlers(verbose=verbose, debug=debug)
    if handlers:
        formatter = logging.Formatter(
            fmt='%(asctime)s [%(levelname)-8s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)
    else:
        logger.addHandler(logging.NullHandler())

    return logger

def log_info(logger, message):
    """Consistent info logging"""
    logger.info(f"ℹ️  {message}")

def log_warning(logger, message):
    """Consistent warning logging"""
    logger.warning(f"⚠️  {message}")

def log_debug(logger, message):
    """Consistent debug logging"""
    logger.debug(f"🔍 {message}")

def log_audio(logger, message):
    """Consistent audio logging"""
    logger.info(f"🎵 {message}")
