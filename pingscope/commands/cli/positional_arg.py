from typing import Generic, TypeVar, get_args, get_origin

T = TypeVar("T")


class PositionalArg(Generic[T]):
    def __init__(
        self,
        name: str,
        index: int,
        data_type: type[T],
        description: str | None = None,
    ):
        self.name = name
        self.index = index

        # ``list[str]`` consumes every remaining positional value.
        self.is_multiarg = get_origin(data_type) is list

        args = get_args(data_type)
        if self.is_multiarg and len(args) > 0:
            self.value_type = args[0]

        else:
            self.value_type = data_type

        self.description = description

    @property
    def data_type(self):
        if self.is_multiarg:
            return f"{self.value_type.__name__}..."

        return self.value_type.__name__

    def to_help_string(self):
        help_string = f"{self.name}: [{self.data_type}]"

        if self.description:
            help_string = f"{help_string} {self.description}"

        return help_string

    def parse(self, value: str):
        try:
            return self.value_type(value)

        except (TypeError, ValueError) as err:
            return err
