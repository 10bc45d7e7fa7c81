import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .config import config


def setup_logging(console: bool = True, log_file: Optional[Path] = None) -> None:
    root = logging.getLogger()
    root.setLevel(logging.INFO)

    if root.handlers:
        return

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

    if console:
        ch = RichHandler(show_path=False, log_time_format="[%X]")
        ch.setLevel(logging.INFO)
        root.addHandler(ch)

    target = log_file or config.log_file
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(str(target), maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    except OSError as e:
        logging.getLogger(__name__).warning("File logging disabled (%s): %s", target, e)
        return
    fh.setLevel(logging.INFO)
    fh.setFormatter(fmt)
    root.addHandler(fh)
