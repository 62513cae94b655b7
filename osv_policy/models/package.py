"""Package and vulnerability record models consumed by policy decisions."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PackageInfo(BaseModel):
    """Identity of a scanned package."""

    model_config = {"extra": "ignore"}

    name: str = Field(default="", description="Package name")
    version: str = Field(default="", description="Package version")
    ecosystem: str = Field(default="", description="Ecosystem, e.g. PyPI or npm")

    def display_name(self) -> str:
        """Get the ecosystem/name/version triple used in report lines."""
        return f"{self.ecosystem}/{self.name}/{self.version}"


class Vulnerability(BaseModel):
    """A single vulnerability finding reported against a package."""

    model_config = {"extra": "ignore"}

    id: str = Field(description="Vulnerability identifier, e.g. GHSA-xxxx or CVE-xxxx")
    aliases: list[str] = Field(
        default_factory=list,
        description="Other identifiers for the same vulnerability",
    )


class PackageVulns(BaseModel):
    """A package together with the findings and licenses detected for it.

    Policy decisions only read these records; helpers that change them
    return new instances.
    """

    model_config = {"extra": "ignore"}

    package: PackageInfo = Field(
        default_factory=PackageInfo, description="Package identity"
    )
    dep_groups: list[str] = Field(
        default_factory=list,
        description="Dependency groups the package belongs to, e.g. dev",
    )
    vulnerabilities: list[Vulnerability] = Field(
        default_factory=list,
        description="Findings reported against this package",
    )
    licenses: list[str] = Field(
        default_factory=list,
        description="Detected license identifiers",
    )
