import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def get_logger(
    name: str = "fileconvertzz",
    logfile: Path | None = None,
    level: int | None = None,
) -> logging.Logger:
    """Return the app logger, adding handlers on demand.

    The console handler is attached on first use. Every distinct ``logfile``
    gets its own UTF-8 file handler, so a later call with new settings still
    writes to the file it asks for. ``level`` replaces the current level.
    """
    logger = logging.getLogger(name)

    if not any(getattr(h, "_convertzz_console", False) for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        ch._convertzz_console = True
        logger.addHandler(ch)
        logger.setLevel(logging.INFO)

    if logfile:
        logfile = Path(logfile).resolve()
        attached = {
            Path(h.baseFilename) for h in logger.handlers if isinstance(h, logging.FileHandler)
        }
        if logfile not in attached:
            logfile.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(logfile, encoding="utf-8")
            fh.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(fh)

    if level is not None:
        logger.setLevel(level)

    return logger
