"""Default English message templates for the built-in rules.

Templates are emitted unexpanded. :attribute is replaced with the field's
display name at render time; the remaining placeholders are filled from
the rule's parameters in order (see PLACEHOLDERS and format_message).
"""

import re
from typing import Any, Sequence


GENERIC_MESSAGE = "The :attribute field is invalid."

DEFAULT_MESSAGES: dict[str, str | dict[str, str]] = {
    "accepted": "The :attribute must be accepted.",
    "accepted_if": "The :attribute must be accepted when :other is :value.",
    "active_url": "The :attribute is not a valid URL.",
    "after": "The :attribute must be a date after :date.",
    "after_or_equal": "The :attribute must be a date after or equal to :date.",
    "alpha": "The :attribute must only contain letters.",
    "alpha_dash": "The :attribute must only contain letters, numbers, dashes and underscores.",
    "alpha_num": "The :attribute must only contain letters and numbers.",
    "array": "The :attribute must be an array.",
    "before": "The :attribute must be a date before :date.",
    "before_or_equal": "The :attribute must be a date before or equal to :date.",
    "between": {
        "numeric": "The :attribute must be between :min and :max.",
        "file": "The :attribute must be between :min and :max kilobytes.",
        "string": "The :attribute must be between :min and :max characters.",
        "array": "The :attribute must have between :min and :max items.",
    },
    "boolean": "The :attribute field must be true or false.",
    "confirmed": "The :attribute confirmation does not match.",
    "current_password": "The password is incorrect.",
    "date": "The :attribute is not a valid date.",
    "date_equals": "The :attribute must be a date equal to :date.",
    "date_format": "The :attribute does not match the format :format.",
    "declined": "The :attribute must be declined.",
    "different": "The :attribute and :other must be different.",
    "digits": "The :attribute must be :digits digits.",
    "digits_between": "The :attribute must be between :min and :max digits.",
    "distinct": "The :attribute field has a duplicate value.",
    "email": "The :attribute must be a valid email address.",
    "ends_with": "The :attribute must end with one of the following: :values.",
    "exists": "The selected :attribute is invalid.",
    "file": "The :attribute must be a file.",
    "filled": "The :attribute field must have a value.",
    "gt": {
        "numeric": "The :attribute must be greater than :value.",
        "file": "The :attribute must be greater than :value kilobytes.",
        "string": "The :attribute must be greater than :value characters.",
        "array": "The :attribute must have more than :value items.",
    },
    "gte": {
        "numeric": "The :attribute must be greater than or equal to :value.",
        "file": "The :attribute must be greater than or equal to :value kilobytes.",
        "string": "The :attribute must be greater than or equal to :value characters.",
        "array": "The :attribute must have :value items or more.",
    },
    "image": "The :attribute must be an image.",
    "in": "The selected :attribute is invalid.",
    "integer": "The :attribute must be an integer.",
    "ip": "The :attribute must be a valid IP address.",
    "ipv4": "The :attribute must be a valid IPv4 address.",
    "ipv6": "The :attribute must be a valid IPv6 address.",
    "json": "The :attribute must be a valid JSON string.",
    "lt": {
        "numeric": "The :attribute must be less than :value.",
        "file": "The :attribute must be less than :value kilobytes.",
        "string": "The :attribute must be less than :value characters.",
        "array": "The :attribute must have less than :value items.",
    },
    "lte": {
        "numeric": "The :attribute must be less than or equal to :value.",
        "file": "The :attribute must be less than or equal to :value kilobytes.",
        "string": "The :attribute must be less than or equal to :value characters.",
        "array": "The :attribute must not have more than :value items.",
    },
    "max": {
        "numeric": "The :attribute must not be greater than :max.",
        "file": "The :attribute must not be greater than :max kilobytes.",
        "string": "The :attribute must not be greater than :max characters.",
        "array": "The :attribute must not have more than :max items.",
    },
    "mimes": "The :attribute must be a file of type: :values.",
    "mimetypes": "The :attribute must be a file of type: :values.",
    "min": {
        "numeric": "The :attribute must be at least :min.",
        "file": "The :attribute must be at least :min kilobytes.",
        "string": "The :attribute must be at least :min characters.",
        "array": "The :attribute must have at least :min items.",
    },
    "not_in": "The selected :attribute is invalid.",
    "not_regex": "The :attribute format is invalid.",
    "numeric": "The :attribute must be a number.",
    "password": "The password is incorrect.",
    "present": "The :attribute field must be present.",
    "prohibited": "The :attribute field is prohibited.",
    "regex": "The :attribute format is invalid.",
    "required": "The :attribute field is required.",
    "required_if": "The :attribute field is required when :other is :value.",
    "required_unless": "The :attribute field is required unless :other is in :values.",
    "required_with": "The :attribute field is required when :values is present.",
    "required_with_all": "The :attribute field is required when :values are present.",
    "required_without": "The :attribute field is required when :values is not present.",
    "required_without_all": "The :attribute field is required when none of :values are present.",
    "same": "The :attribute and :other must match.",
    "size": {
        "numeric": "The :attribute must be :size.",
        "file": "The :attribute must be :size kilobytes.",
        "string": "The :attribute must be :size characters.",
        "array": "The :attribute must contain :size items.",
    },
    "starts_with": "The :attribute must start with one of the following: :values.",
    "string": "The :attribute must be a string.",
    "timezone": "The :attribute must be a valid timezone.",
    "unique": "The :attribute has already been taken.",
    "url": "The :attribute must be a valid URL.",
    "uuid": "The :attribute must be a valid UUID.",
}

# Positional placeholder names per rule. A trailing "*" name takes the
# remaining parameters joined with ", " (e.g. :values for in/mimes).
PLACEHOLDERS: dict[str, tuple[str, ...]] = {
    "accepted_if": ("other", "value"),
    "after": ("date",),
    "after_or_equal": ("date",),
    "before": ("date",),
    "before_or_equal": ("date",),
    "between": ("min", "max"),
    "date_equals": ("date",),
    "date_format": ("format",),
    "different": ("other",),
    "digits": ("digits",),
    "digits_between": ("min", "max"),
    "ends_with": ("values*",),
    "gt": ("value",),
    "gte": ("value",),
    "lt": ("value",),
    "lte": ("value",),
    "max": ("max",),
    "mimes": ("values*",),
    "mimetypes": ("values*",),
    "min": ("min",),
    "required_if": ("other", "value"),
    "required_unless": ("other", "values*"),
    "required_with": ("values*",),
    "required_with_all": ("values*",),
    "required_without": ("values*",),
    "required_without_all": ("values*",),
    "same": ("other",),
    "size": ("size",),
    "starts_with": ("values*",),
}

# A placeholder colon never follows a word character ("HH:mm", "http:")
_PLACEHOLDER = re.compile(r"(?<!\w):([a-z_]+)")


def placeholder_values(
    rule: str,
    display_name: str,
    parameters: Sequence[Any],
) -> dict[str, str]:
    """Map each placeholder a rule's message may use to its value."""
    values = {"attribute": display_name}
    params = [str(p) for p in parameters]
    for index, name in enumerate(PLACEHOLDERS.get(rule, ())):
        if name.endswith("*"):
            values[name[:-1]] = ", ".join(params[index:])
            break
        if index < len(params):
            values[name] = params[index]
    return values


def format_message(
    template: str,
    rule: str,
    display_name: str,
    parameters: Sequence[Any] = (),
) -> str:
    """Expand a message template the way the client renderer does.

    Unknown placeholders are left in place.
    """
    values = placeholder_values(rule, display_name, parameters)

    def replace(match: re.Match) -> str:
        return values.get(match.group(1), match.group(0))

    return _PLACEHOLDER.sub(replace, template)


def unresolved_placeholders(
    template: str,
    rule: str,
    display_name: str,
    parameters: Sequence[Any] = (),
) -> list[str]:
    """List placeholders in a template that nothing can fill."""
    values = placeholder_values(rule, display_name, parameters)
    return [name for name in _PLACEHOLDER.findall(template) if name not in values]
