from .stylize import (
    RESET as RESET,
    can_do_colour as can_do_colour,
    strip_markup as strip_markup,
    stylize_markup as stylize_markup,
)
