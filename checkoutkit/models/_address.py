"""
Address — recipient, location and role, with structural validation.

Only US addresses are checked (5-digit ZIP, 2-letter state); other
countries are treated as structurally valid.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AddressRole(str, Enum):
    SHIPPING = "shipping"
    BILLING = "billing"
    BOTH = "both"


class AddressIssue(str, Enum):
    INVALID_STREET = "invalid_street"
    INVALID_CITY = "invalid_city"
    INVALID_REGION = "invalid_region"
    INVALID_POSTAL_CODE = "invalid_postal_code"

    @property
    def message(self) -> str:
        return _ISSUE_MESSAGES[self]


_ISSUE_MESSAGES: dict[AddressIssue, str] = {
    AddressIssue.INVALID_STREET: "Please enter a valid street address",
    AddressIssue.INVALID_CITY: "Please enter a valid city name",
    AddressIssue.INVALID_REGION: "Please enter a valid state",
    AddressIssue.INVALID_POSTAL_CODE: "Please enter a valid ZIP code",
}


@dataclass(frozen=True, slots=True)
class Address:
    recipient: str
    street_lines: tuple[str, ...]
    city: str
    region: str
    postal_code: str
    country: str = "US"
    role: AddressRole = AddressRole.BOTH
    address_id: str | None = None

    @property
    def street(self) -> str:
        return self.street_lines[0] if self.street_lines else ""

    @property
    def formatted(self) -> str:
        parts = [line for line in self.street_lines if line]
        parts.append(f"{self.city}, {self.region} {self.postal_code}")
        if self.country != "US":
            parts.append(self.country)
        return "\n".join(parts)


def validate_address(address: Address) -> tuple[AddressIssue, ...]:
    """Return structural problems with ``address`` (empty when valid)."""
    if address.country.upper() != "US":
        return ()

    issues: list[AddressIssue] = []
    if len(address.street.strip()) < 5:
        issues.append(AddressIssue.INVALID_STREET)
    if len(address.city.strip()) < 2:
        issues.append(AddressIssue.INVALID_CITY)
    if len(address.region) != 2 or not address.region.isalpha():
        issues.append(AddressIssue.INVALID_REGION)
    zip_code = address.postal_code
    if len(zip_code) != 5 or not (zip_code.isascii() and zip_code.isdigit()):
        issues.append(AddressIssue.INVALID_POSTAL_CODE)
    return tuple(issues)


__all__ = ("AddressRole", "AddressIssue", "Address", "validate_address")
