"""Console output, understood by GitHub Actions.

Lines starting with `::notice::` or `::error::` become annotations on the
workflow run; `::group::` folds the following lines in the job log.
"""

from contextlib import contextmanager
from typing import Iterator


def _escape(message: str) -> str:
    # Workflow commands end at the first newline.
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def info(message: str) -> None:
    print(message)


def notice(message: str) -> None:
    print(f"::notice::{_escape(message)}")


def error(message: str) -> None:
    print(f"::error::{_escape(message)}")


@contextmanager
def group(title: str) -> Iterator[None]:
    """Fold everything printed inside into a collapsible log section."""
    print(f"::group::{title}")
    try:
        yield
    finally:
        print("::endgroup::")
