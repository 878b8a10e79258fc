from typing import Annotated, Literal, Union
from urllib.parse import unquote

from pydantic import BaseModel, Field, computed_field, model_validator


class DirectoryEntry(BaseModel):
    name: str  # Raw label, percent-encoded when it comes from a listing's data-name
    url: str   # Browsing URL for folders, real resource URL for files
    is_file: bool = False
    is_audio: bool = False

    @model_validator(mode="after")
    def _files_are_audio(self) -> "DirectoryEntry":
        # The remote archive only holds mp3 files and folders
        if self.is_file != self.is_audio:
            raise ValueError("is_file and is_audio must agree")
        return self

    @computed_field
    @property
    def display_name(self) -> str:
        return unquote(self.name).replace(".mp3", "", 1)

class ClassificationRecord(BaseModel):
    performer: str
    day: str = ""
    track_name: str
    track_url: str
    duty_type: str = ""

class ScrapeSource(BaseModel):
    kind: Literal["scrape"] = "scrape"
    url: str

class ClassificationSource(BaseModel):
    kind: Literal["classification"] = "classification"
    segments: list[str] = []  # Decoded path segments below the classification root

Source = Annotated[Union[ScrapeSource, ClassificationSource], Field(discriminator="kind")]

class DirectoryListing(BaseModel):
    url: str
    entries: list[DirectoryEntry] = []
