from typing import Iterable

from pydantic import BaseModel

from models.user_model import Invalid, User
from validation.rules import ADDRESS_RULES, ADDRESSES_RULE, USER_RULES, Rule


def address_prefix(index: int) -> str:
    """Path prefix of the address at index, e.g. Addresses[0]."""
    return f"{ADDRESSES_RULE.field}[{index}]."


def _apply(entity: BaseModel, rules: Iterable[Rule], prefix: str = "") -> list[Invalid]:
    return [
        Invalid(fld=f"{prefix}{rule.field}", err=rule.message)
        for rule in rules
        if not rule.check(getattr(entity, rule.attr))
    ]


def validate(user: User) -> list[Invalid]:
    """
    Check a user and its addresses against the rule tables.

    Returns the failures in a fixed order: the user's own fields in table
    order, then the Addresses rule, then each address in list order with its
    fields in table order. An empty list means the user may be stored.

    Pure and total: no I/O, never raises for well-typed input, and the same
    user always yields the same list.
    """
    errors = _apply(user, USER_RULES)

    if not ADDRESSES_RULE.check(user.addresses):
        errors.append(Invalid(fld=ADDRESSES_RULE.field, err=ADDRESSES_RULE.message))
        return errors

    for index, address in enumerate(user.addresses):
        errors.extend(_apply(address, ADDRESS_RULES, prefix=address_prefix(index)))

    return errors
