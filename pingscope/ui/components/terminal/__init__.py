from .key_reader import (
    KEY_DOWN as KEY_DOWN,
    KEY_UP as KEY_UP,
    KeyReader as KeyReader,
    split_keys as split_keys,
)
from .terminal import Terminal as Terminal
from .terminal_config import TerminalConfig as TerminalConfig
