from __future__ import annotations

import logging


def ensure_logging(level: int = logging.INFO) -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")
        root.setLevel(level)
        for handler in root.handlers:
            handler.setFormatter(formatter)
