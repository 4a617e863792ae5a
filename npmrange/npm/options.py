# npmrange/npm/options.py

"""
Options controlling how npm range expressions are compiled and evaluated.
"""

from pydantic import BaseModel, ConfigDict, Field

OR_SEPARATOR = "||"

# ==============================================================
# PARSE OPTIONS
# ==============================================================

class NpmParseOptions(BaseModel):
    """Options for parsing npm ranges."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    include_prerelease: bool = Field(
        default=False,
        description="Treat pre-release versions like releases: every pre-release "
                    "between the bounds is a member, anchored or not."
    )
    max_length: int = Field(
        default=4096,
        gt=0,
        description="Longest range text accepted by the parser"
    )
    max_steps: int = Field(
        default=100_000,
        gt=0,
        description="Scanner step budget; exhausting it is reported as a syntax error"
    )


DEFAULT_PARSE_OPTIONS = NpmParseOptions()
