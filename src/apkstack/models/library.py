"""Pydantic models for the third-party library catalog."""

from typing import Final

from pydantic import BaseModel, ConfigDict

CATEGORY_OTHER: Final[str] = "Other"


class Library(BaseModel):
    """A known third-party dependency from the library catalog."""

    model_config = ConfigDict(frozen=True)

    id: int
    """Catalog identifier, unique per library."""

    package_name: str
    """Root package of the library (e.g., com.squareup.okhttp3)."""

    name: str
    """Human-readable library name."""

    category: str
    """Catalog category (e.g., 'Networking'). CATEGORY_OTHER sorts last."""

    website: str | None = None
    """Project homepage."""

    replacement_package: str | None = None
    """Package this library supersedes; dropped from reports when both are bundled."""

    @property
    def is_other(self) -> bool:
        """Check if the library belongs to the catch-all category."""
        return self.category == CATEGORY_OTHER
