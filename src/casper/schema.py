from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class PackageManifestDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    version: str
    name: Optional[str] = None
    description: Optional[str] = None
    engines: Dict[str, str] = {}
