# inventory_admin/logging_setup.py

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once. Later calls only adjust the level,
    so uvicorn or a test runner that already installed handlers keeps them.
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    else:
        root.setLevel(level.upper())
