from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

DERIVED_KEYS = ("E", "F", "G", "H", "I", "J", "K", "L")
NUMERIC_KEYS = ("mean", "variance") + DERIVED_KEYS


class EvaluationPayload(BaseModel):
    """Wire shape of one evaluation handed to the presentation layer."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    mean: float | None = None
    variance: float | None = None
    E: float | None = None
    F: float | None = None
    G: float | None = None
    H: float | None = None
    I: float | None = None  # noqa: E741
    J: float | None = None
    K: float | None = None
    L: float | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _all_or_nothing(self) -> "EvaluationPayload":
        values = [getattr(self, key) for key in NUMERIC_KEYS]
        if self.ok:
            if any(v is None for v in values) or self.error is not None:
                raise ValueError("a valid payload needs every numeric field and no error")
        else:
            if any(v is not None for v in values) or not self.error:
                raise ValueError("an invalid payload carries only an error message")
        return self


class Publication(BaseModel):
    title: str
    authors: str
    year: int
    journal: str | None = None
    institution: str | None = None
    doi: str | None = None

    @property
    def doi_url(self) -> str | None:
        return f"https://doi.org/{self.doi}" if self.doi else None
