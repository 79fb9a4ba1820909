from __future__ import annotations
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field


class PinSummary(BaseModel):
    path: Optional[str] = None
    filename: Optional[str] = None
    kind: str = Field(..., examples=["certificate", "certificate-request", "private-key"])
    pin: str = Field(..., examples=["d6qzRu9zOECb90Uez27xWltNsj0e1Md7GkYYkVoZWmM="])
    key: Dict[str, Union[str, int]] = {}


class HeaderResult(BaseModel):
    header: str
    rendered: str
    output_mode: str = Field("plain", examples=["plain", "nginx", "apache"])
    pins: List[str] = []
