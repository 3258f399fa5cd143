"""Expansion settings shared by the library entry points and the CLI."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass

from .guard import DEFAULT_BUILD_FLAG
from .synthesis import DEFAULT_INDENT, DEFAULT_VISIBILITY, SYNTHESIZERS, TemplateSynthesizer

BUILD_FLAG_ENV_VAR = "TESTABLEGEN_BUILD_FLAG"


@dataclass(frozen=True)
class ExpansionConfig:
    """
    Settings for peer expansion.

    Attributes:
        build_flag: Conditional-compilation symbol guarding every peer
        visibility: Visibility keyword given to peers
        strategy: Synthesis strategy name ("template" or "interpolation")
        indent: Indentation of the forwarding call inside the peer body
        strip_markers: Remove the marker attribute from the expanded source
    """

    build_flag: str = DEFAULT_BUILD_FLAG
    visibility: str = DEFAULT_VISIBILITY
    strategy: str = TemplateSynthesizer.name
    indent: str = DEFAULT_INDENT
    strip_markers: bool = True

    def __post_init__(self):
        if self.strategy not in SYNTHESIZERS:
            raise ValueError(f"Unknown synthesis strategy: {self.strategy!r}")
        if not self.build_flag:
            raise ValueError("build_flag must not be empty")

    @classmethod
    def from_env(cls, **overrides) -> ExpansionConfig:
        """Build a config, taking the build flag from TESTABLEGEN_BUILD_FLAG when set.

        Explicit keyword overrides win over the environment. Overrides of None are ignored.
        """
        values = {}
        env_flag = os.getenv(BUILD_FLAG_ENV_VAR)
        if env_flag:
            values["build_flag"] = env_flag
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    def replace(self, **changes) -> ExpansionConfig:
        return dataclasses.replace(self, **changes)
