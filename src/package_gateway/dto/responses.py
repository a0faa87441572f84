"""Response DTOs for gateway endpoints."""

from pydantic import BaseModel, Field, TypeAdapter

from package_gateway.entities import Package


class PackageResponse(BaseModel):
    """Single package record as served to registry clients."""

    name: str = Field(..., description="The package name")
    url: str = Field(..., description="The repository URL for the package")

    @classmethod
    def from_entity(cls, package: Package) -> "PackageResponse":
        return cls(name=package.name, url=package.url)


# Serializer for JSON arrays of package records (search results)
PackageListAdapter = TypeAdapter(list[PackageResponse])
