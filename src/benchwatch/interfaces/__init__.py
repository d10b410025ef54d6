"""All user-facing timing interfaces."""
from .decorators import watch, watch_block, watch_call
