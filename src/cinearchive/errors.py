"""Exception types raised by the catalogue services."""


class CatalogueError(Exception):
    """Base class for catalogue errors."""


class QueryFailed(CatalogueError):
    """A read against the database failed.

    The underlying driver message is preserved on ``message`` so the
    presentation layer can show it as is.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidFilterValue(CatalogueError, ValueError):
    """A structured filter value could not be parsed.

    Never leaves the filter layer: callers treat the field as absent.
    """


class StorageError(CatalogueError):
    """Uploading an image to the object store failed."""


class FilmNotFound(CatalogueError):
    """No film exists with the requested id."""

    def __init__(self, film_id: str) -> None:
        super().__init__(f"Film {film_id!r} not found")
        self.film_id = film_id
