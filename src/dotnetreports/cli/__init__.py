"""Command line interface for dotnetreports."""

from __future__ import annotations

import sys
from typing import Iterable, Optional


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point for the ``dotnetreports`` console script."""
    from dotnetreports.cli.runner import CLIRunner

    return CLIRunner().run(argv)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
