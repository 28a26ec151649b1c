"""Decorators for vresource commands."""

import functools
import logging
from typing import Callable, Any

import typer
from rich.console import Console

from vresource.exceptions import (
    InvalidPathError,
    ManifestError,
    RepositoryError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)
console = Console()


def handle_repository_errors(func: Callable) -> Callable:
    """
    Decorator to handle common repository errors in CLI commands.

    Maps errors to messages and exit codes:
    - ResourceNotFoundError: exit code 2
    - InvalidPathError, ManifestError: exit code 1
    - Other repository, OS and decoding errors: exit code 1
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except ResourceNotFoundError as e:
            console.print(f"[bold red]Not found:[/bold red] {e}")
            raise typer.Exit(code=2)
        except InvalidPathError as e:
            console.print(f"[bold red]Invalid path:[/bold red] {e}")
            raise typer.Exit(code=1)
        except ManifestError as e:
            console.print(f"[bold red]Invalid manifest:[/bold red] {e}")
            raise typer.Exit(code=1)
        except RepositoryError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)
        except OSError as e:
            logger.debug(f"I/O error in {func.__name__}", exc_info=True)
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)
        except UnicodeDecodeError as e:
            console.print(f"[bold red]Error:[/bold red] Cannot decode content: {e}")
            raise typer.Exit(code=1)

    return wrapper
