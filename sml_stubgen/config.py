"""
Runtime settings for the stub generator.

Values come from STUBGEN_* environment variables (the CLI loads a .env file
first) and can be overridden by keyword arguments to load_config().
"""

import os
from typing import Optional
from pydantic import BaseModel, Field, ValidationError

from .exceptions import StubgenError


class StubgenConfig(BaseModel):
    """Settings shared by the Extractor, Emitter and batch driver."""
    max_line_width: int = Field(default=100, gt=0)   # Comment wrap width, indent included
    indent: str = "  "                               # One nesting level
    emit_comments: bool = True                       # False drops every (*! ... *) block
    header_tag: str = "h4"                           # Tag holding "Synopsis", "Interface", ...
    output_suffix: str = ".sml"
    strict: bool = False                             # Re-raise the first page failure


# Environment variable → config field
_ENV_FIELDS = {
    "STUBGEN_MAX_LINE_WIDTH": "max_line_width",
    "STUBGEN_INDENT_WIDTH": "indent_width",
    "STUBGEN_EMIT_COMMENTS": "emit_comments",
    "STUBGEN_HEADER_TAG": "header_tag",
    "STUBGEN_OUTPUT_SUFFIX": "output_suffix",
    "STUBGEN_STRICT": "strict",
}


def load_config(**overrides: Optional[object]) -> StubgenConfig:
    """
    Build a StubgenConfig from the environment plus explicit overrides.

    Overrides whose value is None are ignored, so argparse defaults can be
    passed straight through.
    """
    values: dict = {}
    for env_name, field in _ENV_FIELDS.items():
        raw = os.getenv(env_name)
        if raw:
            values[field] = raw

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        if "indent_width" in values:
            values["indent"] = " " * int(values.pop("indent_width"))
        return StubgenConfig(**values)
    except (ValueError, ValidationError) as e:
        raise StubgenError(f"Invalid configuration: {e}", details={"values": values}) from e
