r"""Rendering of a request as a reproducible curl command.

The command is meant to be pasted into a shell to replay the request,
not to be parsed back.
"""

from __future__ import annotations

__all__ = ["emit_curl_log", "format_curl", "quote_sh", "write_curl_log"]

import logging
import shlex
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from reqchain.core.config import CURL_LOG_PREFIX
from reqchain.exceptions import LoggingError

if TYPE_CHECKING:
    import os
    from collections.abc import Iterable

logger: logging.Logger = logging.getLogger(__name__)


def quote_sh(value: str) -> str:
    """Quote a value for a POSIX shell.

    Values without a single quote are wrapped in single quotes. Other
    values fall back to ``shlex.quote``.

    Args:
        value: The value to quote.

    Returns:
        The quoted value.

    Example:
        ```pycon
        >>> from reqchain.utils.curl import quote_sh
        >>> print(quote_sh('{"a":1}'))
        '{"a":1}'
        >>> print(quote_sh("it's"))
        'it'"'"'s'

        ```
    """
    if "'" not in value:
        return f"'{value}'"
    return shlex.quote(value)


def format_curl(
    method: str,
    url: str,
    headers: Iterable[tuple[str, str]] = (),
    body: bytes | None = None,
) -> str:
    """Render a request as a curl command line.

    Args:
        method: The HTTP method.
        url: The target URL.
        headers: The request headers as ``(name, value)`` pairs, in the
            order they should appear.
        body: The request body before any compression. Nothing is
            rendered for an empty body. Bytes that are not valid UTF-8
            are kept as surrogate escapes, so ``write_curl_log``
            reproduces them exactly.

    Returns:
        The curl command.

    Example:
        ```pycon
        >>> from reqchain.utils.curl import format_curl
        >>> print(format_curl(
        ...     "POST",
        ...     "https://example.com/items",
        ...     headers=[("Content-Type", "application/json")],
        ...     body=b'{"a":1}',
        ... ))
        curl -v -X POST -H "Content-Type: application/json" --data-binary '{"a":1}' 'https://example.com/items'

        ```
    """
    args = ["curl", "-v", "-X", method]
    for name, value in headers:
        args.extend(["-H", f'"{name}: {value}"'])
    if body:
        text = body.decode("utf-8", errors="surrogateescape")
        args.extend(["--data-binary", quote_sh(text)])
    args.append(quote_sh(str(url)))
    return " ".join(args)


def write_curl_log(path: str | os.PathLike, command: str) -> None:
    """Write a curl command to a file, replacing its content.

    Args:
        path: The destination file.
        command: The curl command.

    Raises:
        LoggingError: If the file cannot be written.
    """
    try:
        Path(path).write_text(command, encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        msg = f"log err: {exc}"
        raise LoggingError(msg, cause=exc) from exc
    logger.debug(f"Wrote curl command to {path}")


def emit_curl_log(command: str) -> None:
    """Print a curl command to the diagnostic stream (stderr).

    Bytes of a binary body show as backslash escapes.

    Args:
        command: The curl command.
    """
    # Surrogate escapes cannot be written to a strict text stream
    printable = command.encode("utf-8", errors="backslashreplace").decode("utf-8")
    print(f"{CURL_LOG_PREFIX}{printable}", file=sys.stderr)  # noqa: T201
