"""Errors raised by repositories and their collaborators."""


class RepositoryError(Exception):
    """Base class for all repository errors."""
    pass


class InvalidPathError(RepositoryError, ValueError):
    """A path or selector is not a non-empty string starting with "/"."""
    pass


class InvalidMountArgumentError(RepositoryError, TypeError):
    """The value passed to mount() is neither a repository nor a callable."""
    pass


class ResourceNotFoundError(RepositoryError, LookupError):
    """The requested resource does not exist."""

    @classmethod
    def for_path(cls, path: str) -> 'ResourceNotFoundError':
        return cls(f'The resource "{path}" does not exist.')


class RepositoryFactoryError(RepositoryError):
    """A mount point factory did not return a repository."""
    pass


class UnsupportedLanguageError(RepositoryError, ValueError):
    """The query language is not supported."""

    @classmethod
    def for_language(cls, language: str) -> 'UnsupportedLanguageError':
        return cls(f'The language "{language}" is not supported. Expected "glob".')


class UnsupportedResourceError(RepositoryError, TypeError):
    """The resource cannot be stored in this repository."""
    pass


class UnsupportedOperationError(RepositoryError):
    """The operation is not allowed on this repository or path."""
    pass


class NoDirectoryError(RepositoryError):
    """Attempted to list the children of a file."""
    pass


class ManifestError(RepositoryError):
    """A mount manifest could not be read or is malformed."""
    pass
