"""
Generator metadata that rides along with every outgoing call.

Build one `GeneratorContext` at start-up (directly, or with `from_env`) and
hand it to whatever needs it; nothing here is module-global.
"""

from __future__ import annotations

import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel

from .errors import ConfigurationError

DEFAULT_CONTEXT_KEY = "ruddertyper"


class GeneratorContext(BaseModel):
    """Read-only identity of the wrapper generator and tracking plan."""

    model_config = {"frozen": True}

    sdk: str
    language: str = "python"
    generator_version: str
    tracking_plan_id: str
    tracking_plan_version: Union[int, str]
    context_key: str = DEFAULT_CONTEXT_KEY

    def as_mapping(self) -> Mapping[str, Any]:
        """Wire form, as attached under `context_key`."""
        return MappingProxyType(
            {
                "sdk": self.sdk,
                "language": self.language,
                "rudderTyperVersion": self.generator_version,
                "trackingPlanId": self.tracking_plan_id,
                "trackingPlanVersion": self.tracking_plan_version,
            }
        )

    @classmethod
    def from_env(
        cls,
        prefix: str = "TYPERTRACK_",
        dotenv_path: Optional[Union[str, Path]] = None,
    ) -> "GeneratorContext":
        """
        Read `<prefix>SDK`, `<prefix>LANGUAGE`, `<prefix>GENERATOR_VERSION`,
        `<prefix>TRACKING_PLAN_ID` and `<prefix>TRACKING_PLAN_VERSION`.
        A `.env` file is loaded first; real environment variables win.
        """
        # find_dotenv() would search from this file, not the application
        load_dotenv(dotenv_path or find_dotenv(usecwd=True), override=False)

        def required(name: str) -> str:
            value = os.environ.get(prefix + name)
            if not value:
                raise ConfigurationError(f"{prefix + name} must be set")
            return value

        return cls(
            sdk=required("SDK"),
            language=os.environ.get(prefix + "LANGUAGE") or "python",
            generator_version=required("GENERATOR_VERSION"),
            tracking_plan_id=required("TRACKING_PLAN_ID"),
            tracking_plan_version=required("TRACKING_PLAN_VERSION"),
            context_key=os.environ.get(prefix + "CONTEXT_KEY") or DEFAULT_CONTEXT_KEY,
        )
