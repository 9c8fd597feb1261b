"""Typer CLI entrypoint with structured error handling."""

from __future__ import annotations

import sys

import typer

from normal_reference.cli.commands.compare import compare
from normal_reference.cli.commands.fit import fit
from normal_reference.cli.commands.propagate import propagate
from normal_reference.exceptions import (
    ConfigError,
    DataSourceError,
    DomainError,
    InsufficientDataError,
    PropagationError,
    ResourceLimitError,
)
from normal_reference.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Reference-prior posterior tools for Normal samples", pretty_exceptions_enable=False)


app.command()(fit)
app.command()(compare)
app.command()(propagate)


log = get_logger(__name__, component="cli")


def main() -> None:
    configure_logging(component="cli")
    try:
        app()
    except (ConfigError, DataSourceError) as exc:
        log.error(str(exc))
        raise SystemExit(1)
    except InsufficientDataError as exc:
        log.error(f"Data validation failed: {exc}")
        raise SystemExit(2)
    except DomainError as exc:
        log.error(f"Invalid distribution parameter: {exc}")
        raise SystemExit(3)
    except ResourceLimitError as exc:
        log.error(f"Resource limit exceeded: {exc}")
        raise SystemExit(4)
    except PropagationError as exc:
        log.error(f"Propagation failed at iteration {exc.iteration}: {exc}")
        raise SystemExit(5)
    except KeyboardInterrupt:
        log.info("Shutdown requested.")
        raise SystemExit(130)
    except Exception:
        log.exception("Unhandled exception")
        raise SystemExit(255)


if __name__ == "__main__":
    # Use sys.exit to ensure proper exit code propagation under raw python invocation
    sys.exit(main())
