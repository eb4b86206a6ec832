# File: src/silencedis/member_access/base/fs_helpers.py
"""
File System Helpers
"""

import logging
from pathlib import Path
from typing import IO, TypeAlias

import dotenv


StrPath: TypeAlias = str | Path


def fs_safe_relpath(path: StrPath, root: Path) -> str:
    """Return a path with '..' segments, or fallback on the full path, instead of raising"""
    p: Path = Path(path).resolve()
    r: Path = root.resolve()
    try:
        return p.relative_to(r, walk_up=True).as_posix()
    except ValueError:
        return p.as_posix()


def fs_load_dotenv(
    *,
    logger: logging.Logger | None = None,
    dotenv_path: StrPath | None = None,
    stream: IO[str] | None = None,
    verbose: bool = False,
    override: bool = False,
    interpolate: bool = True,
    encoding: str | None = "utf-8",
) -> bool:
    """
    Parse a .env file and then load all the variables found as environment variables.

    :param logger: Logger to use for warnings and info messages, if supplied verbose is enabled.
    :param dotenv_path: Absolute or relative path to .env file.
    :param stream: Text stream (such as `io.StringIO`) with .env content, used if `dotenv_path` is `None`.
    :param verbose: Whether to output a warning the .env file is missing.
    :param override: Whether to override the environment variables with the variables from the `.env` file.
    :param interpolate: Whether to interpolate environment variables in the .env file.
    :return: True if at least one environment variable is set else False

    If both `dotenv_path` and `stream` are `None`, the .env file is searched for
    upward from the current working directory."""
    if logger is not None and bool(logger):
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
        interpolate=interpolate,
        encoding=encoding,
    )


# End of file: src/silencedis/member_access/base/fs_helpers.py
