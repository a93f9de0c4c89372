"""Models describing the renditions listed in a master playlist."""

from pydantic import BaseModel, ConfigDict


class ManifestEntry(BaseModel):
    """One playable rendition: display label, pixel size and media playlist URL."""

    model_config = ConfigDict(frozen=True)

    quality: str
    resolution: str
    url: str
