"""Package domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Package:
    """A registered package as read from the metadata store.

    Attributes:
        name: Package name, case-sensitive, the package's identity
        url: Repository URL the package resolves to
    """

    name: str
    url: str
