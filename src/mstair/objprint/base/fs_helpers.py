# File: src/mstair/objprint/base/fs_helpers.py
"""
File System Helpers
"""

import logging
from pathlib import Path
from typing import IO

import dotenv


def fs_load_dotenv(
    *,
    logger: logging.Logger | None = None,
    dotenv_path: str | Path | None = None,
    stream: IO[str] | None = None,
    verbose: bool = False,
    override: bool = False,
    encoding: str | None = "utf-8",
) -> bool:
    """
    Copy the variables of a ``.env`` file into ``os.environ``.

    The logging layer calls this so LOG_LEVEL* settings may live in a project's
    ``.env`` file. Without `dotenv_path` or `stream`, the file is searched for
    from the current working directory upward; no file found means nothing to do.

    :param logger: Receives python-dotenv's warnings; passing one turns `verbose` on.
    :param dotenv_path: Explicit ``.env`` location.
    :param stream: ``.env`` content to read instead of a file.
    :param verbose: Warn when the file does not exist.
    :param override: Replace variables that are already set.
    :return: True if the file defined at least one variable.
    """
    if logger is not None:
        dotenv.main.logger = logger
        verbose = True
    if dotenv_path is None and stream is None:
        dotenv_path = dotenv.find_dotenv(usecwd=True) or None
        if dotenv_path is None:
            return False
    return dotenv.load_dotenv(
        dotenv_path=dotenv_path,
        stream=stream,
        verbose=verbose,
        override=override,
        encoding=encoding,
    )


# End of file: src/mstair/objprint/base/fs_helpers.py
