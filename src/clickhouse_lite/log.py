import logging


class ColorfulFormatter(logging.Formatter):
    grey = "\x1b[38;20m"
    green = "\x1b[32;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"
    fmt = "%(asctime)s::%(name)s::%(levelname)s: %(message)s (%(filename)s:%(lineno)d)"

    FORMATS = {
        logging.DEBUG: grey + fmt + reset,
        logging.INFO: green + fmt + reset,
        logging.WARNING: yellow + fmt + reset,
        logging.ERROR: red + fmt + reset,
        logging.CRITICAL: bold_red + fmt + reset,
    }

    def format(self, record: logging.LogRecord):
        log_fmt = self.FORMATS.get(record.levelno)
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


def get_default_logger(name: str, level: int = logging.INFO, propagate: bool = False):
    logger = logging.getLogger(name)
    logger.setLevel(level)
    # modules are imported once, but tests reload them
    if not any(getattr(h, "_clickhouse_lite", False) for h in logger.handlers):
        console_log_handler = logging.StreamHandler()
        console_log_handler.setFormatter(ColorfulFormatter())
        console_log_handler._clickhouse_lite = True
        logger.addHandler(console_log_handler)
    logger.propagate = propagate
    return logger
