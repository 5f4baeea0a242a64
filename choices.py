from enum import Enum


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, value):
        """Return the member for `value` (a member or its exact display value)."""
        return _parse_choice(cls, value, "priority")


class Status(str, Enum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"

    @classmethod
    def parse(cls, value):
        return _parse_choice(cls, value, "status")


def _parse_choice(enum_cls, value, label):
    for member in enum_cls:
        if value is member or value == member.value:
            return member
    allowed = ", ".join(member.value for member in enum_cls)
    raise ValueError(f"Invalid {label} {value!r}. Allowed values: {allowed}.")
