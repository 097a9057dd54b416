"""Pydantic models for cleaning results."""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


class CleaningResult(BaseModel):
    """Outcome of cleaning one document."""

    success: bool = Field(description="Whether a cleaned file was produced")
    original_name: str = Field(description="File name (or URL) of the source document")
    cleaned_name: str = Field(
        default="",
        description="File name of the cleaned document, e.g. '<title>_clean.html'",
    )
    output_path: str = Field(default="", description="Where the cleaned document was written")
    error: str = Field(default="", description="Why cleaning failed, empty on success")


class BatchReport(BaseModel):
    """Aggregated outcome of a run over several documents."""

    results: list[CleaningResult] = Field(default_factory=list)

    @computed_field
    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @computed_field
    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success)
