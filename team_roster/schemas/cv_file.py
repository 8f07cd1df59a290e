"""Candidate CV file handed to the attachment manager."""

from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field


class CVFile(BaseModel):
    """A CV file as selected by the administrator, before validation."""

    file_name: str = Field(..., description="Original file name")
    media_type: str = Field(..., description="Declared media type, e.g. application/pdf")
    content: bytes = Field(..., repr=False)

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Union[str, Path], media_type: str = "application/pdf") -> "CVFile":
        """Read a CV from disk."""
        path = Path(path)
        return cls(file_name=path.name, media_type=media_type, content=path.read_bytes())
