"""``--print-readme`` — emit the README shipped in the package metadata."""

import sys
from importlib.metadata import PackageNotFoundError, metadata


def read_readme() -> str:
    """Return the long description of the installed distribution.

    Raises:
        PackageNotFoundError: If staticroute is not installed.
    """
    md = metadata("staticroute")
    return md.get("Description") or md.get_payload() or ""  # type: ignore[attr-defined]


def print_readme() -> None:
    """Write the README to stdout; exit 1 if it is unavailable."""
    try:
        readme = read_readme()
    except PackageNotFoundError as exc:
        print("Error: package metadata not found (is staticroute installed?)", file=sys.stderr)
        raise SystemExit(1) from exc
    print(readme)
