from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, RootModel, StrictInt, field_validator


def _absent_str(value: Any) -> Any:
    # JSON null reaches the validator as a missing value, not a type error.
    return "" if value is None else value


class UserAddress(BaseModel):
    """An address owned by a user. Position in the parent's list is its order."""

    model_config = ConfigDict(populate_by_name=True)

    type: StrictInt | None = Field(default=None, alias="Type")
    line_one: str = Field(default="", alias="LineOne")
    line_two: str | None = Field(default=None, alias="LineTwo")
    city: str = Field(default="", alias="City")
    state: str = Field(default="", alias="State")
    zipcode: str = Field(default="", alias="Zipcode")
    phone: str = Field(default="", alias="Phone")

    null_strings_as_absent = field_validator(
        "line_one", "city", "state", "zipcode", "phone", mode="before"
    )(_absent_str)


class User(BaseModel):
    """
    A customer/account record.

    Every field has an "absent" default, and null means absent, so that any
    well-formed JSON object decodes; completeness is checked by the validator,
    not by pydantic. user_id and the two timestamps are owned by the store.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="UserID")
    user_type: StrictInt | None = Field(default=None, alias="UserType")
    first_name: str = Field(default="", alias="FirstName")
    last_name: str = Field(default="", alias="LastName")
    email: str = Field(default="", alias="Email")
    company: str | None = Field(default=None, alias="Company")

    addresses: list[UserAddress] = Field(default_factory=list, alias="Addresses")

    date_created: datetime | None = Field(default=None, alias="DateCreated")
    date_modified: datetime | None = Field(default=None, alias="DateModified")

    null_strings_as_absent = field_validator("first_name", "last_name", "email", mode="before")(
        _absent_str
    )

    @field_validator("addresses", mode="before")
    @classmethod
    def null_addresses_as_absent(cls, value: Any) -> Any:
        return [] if value is None else value


class UsersList(RootModel[List[User]]):
    """A list wrapper for multiple users."""

    ...


class Invalid(BaseModel):
    """One validation failure: the offending field path and a message."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    fld: str = Field(alias="Fld")
    err: str = Field(alias="Err")


class InvalidList(RootModel[List[Invalid]]):
    """The ordered validation failures for one entity."""

    ...
