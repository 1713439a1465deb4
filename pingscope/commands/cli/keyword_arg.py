from types import UnionType
from typing import Generic, Literal, TypeVar, get_args, get_origin

KeywordArgType = Literal[
    "keyword",
    "flag",
]


T = TypeVar("T")


class KeywordArg(Generic[T]):
    def __init__(
        self,
        name: str,
        data_type: type[T],
        short_name: str | None = None,
        default: T | None = None,
        required: bool = True,
        arg_type: KeywordArgType = "keyword",
        description: str | None = None,
    ):
        self.name = name
        self.short_name = short_name

        self.full_flag = f"--{name.replace('_', '-')}"
        self.short_flag = f"-{short_name}" if short_name else None

        if get_origin(data_type) in (UnionType, Literal):
            self.value_type = tuple(
                subtype for subtype in get_args(data_type) if subtype is not type(None)
            )

        else:
            self.value_type = tuple([data_type])

        self.required = required
        self.default = default
        self.arg_type: KeywordArgType = arg_type
        self.description = description

    @property
    def data_type(self):
        return ", ".join(
            subtype.__name__ if isinstance(subtype, type) else repr(subtype)
            for subtype in self.value_type
        )

    @property
    def flags(self):
        if self.short_flag:
            return [self.full_flag, self.short_flag]

        return [self.full_flag]

    def to_help_string(self):
        arg_type = "flag" if self.arg_type == "flag" else self.data_type

        flags = "/".join(self.flags)
        help_string = f"{flags}: [{arg_type}]"

        if self.description:
            help_string = f"{help_string} {self.description}"

        if self.arg_type == "keyword" and self.default is not None:
            help_string = f"{help_string} (default: {self.default})"

        return help_string

    def parse(self, value: str):
        parse_error: Exception | None = None

        for subtype in self.value_type:
            try:
                if not isinstance(subtype, type):
                    if value == str(subtype):
                        return subtype

                    raise ValueError(f"{value} is not {subtype!r}")

                return subtype(value)

            except (TypeError, ValueError) as err:
                parse_error = err

        return parse_error
