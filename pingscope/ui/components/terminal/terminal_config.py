from pydantic import BaseModel, StrictBool, StrictInt

from pingscope.ui.config.mode import TerminalDisplayMode


class TerminalConfig(BaseModel):
    width: StrictInt | None = None
    height: StrictInt | None = None
    terminal_mode: TerminalDisplayMode = "compatability"
    no_color: StrictBool = False
