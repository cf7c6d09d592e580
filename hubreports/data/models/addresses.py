from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

ADDRESS_FIELDS = ("firstname", "lastname", "address1", "address2", "city", "zipcode", "state", "phone")


def join_name_parts(*parts: Any) -> str:
    """Space separated non-blank parts; missing values (None or NaN) are skipped."""
    return " ".join(p.strip() for p in parts if isinstance(p, str) and p.strip())


class Address(BaseModel):
    """Postal address attached to orders."""
    firstname: Optional[str] = Field(default=None, description="First name of the addressee")
    lastname: Optional[str] = Field(default=None, description="Last name of the addressee")
    address1: Optional[str] = Field(default=None, description="Street line 1")
    address2: Optional[str] = Field(default=None, description="Street line 2")
    city: Optional[str] = Field(default=None, description="City")
    zipcode: Optional[str] = Field(default=None, description="Postcode")
    state: Optional[str] = Field(default=None, description="State or region name")
    phone: Optional[str] = Field(default=None, description="Contact phone number")

    @property
    def full_name(self) -> str:
        return join_name_parts(self.firstname, self.lastname)
