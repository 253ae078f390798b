# ==========================================
# CONFIGURATION
# ==========================================
import json
import os

from pydantic import BaseModel, Field

CONFIG_FILE = "sprig.json"


class CompilerConfig(BaseModel):
    """Limits applied at the compiler boundary and by the tree builder."""
    max_input_length: int = Field(default=65536, gt=0)
    # Groups and '>' chains both recurse while building
    max_depth: int = Field(default=64, gt=0)
    integer_bits: int = Field(default=64, ge=8, le=128)
    # Counts every node copied by numeric multipliers
    max_nodes: int = Field(default=100000, gt=0)


def load_config(path=None):
    """
    Load compiler configuration from a JSON file.

    Without an explicit path, ``sprig.json`` in the working directory is tried
    first, then ``~/.sprig/config.json``. Defaults are used when none exists.
    """
    if path is not None:
        paths = [path]
    else:
        paths = [CONFIG_FILE, os.path.expanduser("~/.sprig/config.json")]

    for p in paths:
        if os.path.exists(p):
            with open(p, "r") as f:
                return CompilerConfig(**json.load(f))

    if path is not None:
        raise FileNotFoundError(f"Config not found: {path}")
    return CompilerConfig()
