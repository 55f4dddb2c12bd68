import logging

from colorama import Fore, Style


class ColorFormatter(logging.Formatter):
    """Colours warnings and errors; other levels are left as-is."""

    COLORS = {
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED,
    }

    def format(self, record):
        message = super().format(record)
        color = self.COLORS.get(record.levelno)
        if color:
            return f"{color}{message}{Style.RESET_ALL}"
        return message


def configure_logging(level=logging.INFO):
    """Attach a coloured stream handler to the `app` logger."""
    logger = logging.getLogger("app")
    if any(isinstance(h.formatter, ColorFormatter) for h in logger.handlers):
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
