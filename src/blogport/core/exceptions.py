"""Core exceptions for Blogport."""


class BlogportError(Exception):
    """Base exception for all Blogport errors."""


class DuplicateSlugError(BlogportError):
    """Raised when two posts normalise to the same slug."""

    def __init__(self, slug: str, existing_filename: str) -> None:
        self.slug = slug
        self.existing_filename = existing_filename
        super().__init__(f"Slug '{slug}' is already registered for '{existing_filename}'.")


class RegistrySealedError(BlogportError):
    """Raised when a post is registered after the registry was sealed."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Cannot register '{slug}': the registry is sealed.")


class InvalidPostDateError(BlogportError):
    """Raised when a publish date cannot yield a 12-digit timestamp prefix."""

    def __init__(self, date: str) -> None:
        self.date = date
        super().__init__(f"Publish date '{date}' is too short to build a filename prefix.")


class DuplicateFilenameError(BlogportError):
    """Raised when two distinct posts would be written to the same file."""

    def __init__(self, filename: str, slug: str, existing_slug: str) -> None:
        self.filename = filename
        self.slug = slug
        self.existing_slug = existing_slug
        super().__init__(f"'{slug}' and '{existing_slug}' would both be written to '{filename}'.")
