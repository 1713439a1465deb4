from .color import ColorName

TARGET_COLORS: tuple[ColorName, ...] = (
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "red",
    "orange",
    "purple",
    "lime",
    "pink",
    "dark_cyan",
    "dark_green",
    "dark_blue",
    "dark_magenta",
)

DEFAULT_TARGET_COLOR: ColorName = "white"


class TargetPalette:
    """
    Assigns each target a colour by its position in the caller-supplied
    target list, so the chart and the table agree and a target keeps its
    colour regardless of when it first reports.
    """

    def __init__(self, targets: list[str]) -> None:
        self._colors: dict[str, ColorName] = {}

        for idx, target in enumerate(targets):
            self._colors.setdefault(target, TARGET_COLORS[idx % len(TARGET_COLORS)])

    def color_for(self, target: str) -> ColorName:
        return self._colors.get(target, DEFAULT_TARGET_COLOR)

    def colors_for(self, targets: list[str]) -> dict[str, ColorName]:
        return {target: self.color_for(target) for target in targets}
