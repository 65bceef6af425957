from typing import Any, Callable, NamedTuple


class Rule(NamedTuple):
    """
    One entry in an entity's rule table.

    field is the JSON name reported in Invalid.Fld, attr is the model
    attribute the predicate is applied to.
    """

    field: str
    attr: str
    check: Callable[[Any], bool]
    message: str


REQUIRED_POSITIVE = "required, must be positive"
REQUIRED_NOT_BLANK = "required, must not be blank"
REQUIRED_EMAIL = "required, must be a valid email address"
ADDRESSES_NOT_EMPTY = "must contain at least one address"


def is_positive(value: Any) -> bool:
    # bool is an int subclass; True is not a user type.
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def is_not_blank(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def is_email(value: Any) -> bool:
    """Exactly one '@' with something on both sides."""
    if not is_not_blank(value):
        return False
    local, sep, domain = value.strip().partition("@")
    return sep == "@" and "@" not in domain and local != "" and domain != ""


def is_not_empty(value: Any) -> bool:
    return value is not None and len(value) > 0


# Order matters: errors are reported in table order.
USER_RULES: tuple[Rule, ...] = (
    Rule("UserType", "user_type", is_positive, REQUIRED_POSITIVE),
    Rule("FirstName", "first_name", is_not_blank, REQUIRED_NOT_BLANK),
    Rule("LastName", "last_name", is_not_blank, REQUIRED_NOT_BLANK),
    Rule("Email", "email", is_email, REQUIRED_EMAIL),
)

ADDRESSES_RULE = Rule("Addresses", "addresses", is_not_empty, ADDRESSES_NOT_EMPTY)

ADDRESS_RULES: tuple[Rule, ...] = (
    Rule("Type", "type", is_positive, REQUIRED_POSITIVE),
    Rule("LineOne", "line_one", is_not_blank, REQUIRED_NOT_BLANK),
    Rule("City", "city", is_not_blank, REQUIRED_NOT_BLANK),
    Rule("State", "state", is_not_blank, REQUIRED_NOT_BLANK),
    Rule("Zipcode", "zipcode", is_not_blank, REQUIRED_NOT_BLANK),
    Rule("Phone", "phone", is_not_blank, REQUIRED_NOT_BLANK),
)
