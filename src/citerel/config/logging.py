"""Logging setup for the citerel CLI and embedding applications."""

from __future__ import annotations

import logging
from typing import Final

# Third-party loggers that are chatty at INFO and only useful when debugging.
NOISY_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Initialise the root logger with a terse CLI format.

    ``verbose`` switches citerel to DEBUG and lets HTTP client logs through;
    otherwise the HTTP stack is held at WARNING. Pass ``force=True`` to
    reconfigure during tests.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    third_party_level = logging.DEBUG if verbose else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)
