from .color import (
    Color as Color,
    ColorName as ColorName,
)
from .palette import (
    DEFAULT_TARGET_COLOR as DEFAULT_TARGET_COLOR,
    TARGET_COLORS as TARGET_COLORS,
    TargetPalette as TargetPalette,
)
