import logging
import sys

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Send ``babyboard.*`` log records to stdout.

    Safe to call more than once; the app factory, the entry point and the
    tests may all ask for the logger.
    """
    logger = logging.getLogger("babyboard")
    if logger.handlers:
        return logger
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    # uvicorn logs one line per request; keep only its warnings
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return logger
