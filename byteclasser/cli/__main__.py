from __future__ import annotations

"""Module entry point for `python -m byteclasser.cli`."""

if __name__ == "__main__":  # pragma: no cover (invocation driven)
    from byteclasser.cli import cli

    cli()
