from .cli import CLI as CLI, run_cli as run_cli
from .command import Command as Command, create_command as create_command
from .inspect_wrapped import assemble_expanded_args as assemble_expanded_args
from .keyword_arg import KeywordArg as KeywordArg
from .positional_arg import PositionalArg as PositionalArg
