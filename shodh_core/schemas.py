from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator


TBaseSchema = TypeVar("TBaseSchema", bound="BaseSchema")


class BaseSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    def to_json(self) -> str:
        return self.model_dump_json()

    def to_dict(self) -> dict[str, object]:
        return self.model_dump()

    @classmethod
    def from_json(cls: type[TBaseSchema], data: str) -> TBaseSchema:
        return cls.model_validate_json(data)

    @classmethod
    def from_dict(cls: type[TBaseSchema], data: Mapping[str, object]) -> TBaseSchema:
        return cls.model_validate(data)


class CaseSensitivity(str, Enum):
    SENSITIVE = "sensitive"
    INSENSITIVE = "insensitive"


class TypeFilter(str, Enum):
    NONE = "none"
    FILES = "files"
    DIRS = "dirs"


class Candidate(BaseSchema):
    """A path produced by traversal, with its type flags captured at walk time."""

    path: str
    is_dir: bool = False
    is_file: bool = False

    @model_validator(mode="after")
    def flags_exclusive(self) -> "Candidate":
        if self.is_dir and self.is_file:
            raise ValueError("candidate cannot be both a file and a directory")
        return self


class Query(BaseSchema):
    text: str
    case: CaseSensitivity = CaseSensitivity.INSENSITIVE
    files_only: bool = False
    dirs_only: bool = False

    @property
    def folded_text(self) -> str:
        if self.case is CaseSensitivity.INSENSITIVE:
            return self.text.lower()
        return self.text

    @property
    def type_filters(self) -> tuple[TypeFilter, ...]:
        filters: list[TypeFilter] = []
        if self.files_only:
            filters.append(TypeFilter.FILES)
        if self.dirs_only:
            filters.append(TypeFilter.DIRS)
        return tuple(filters) or (TypeFilter.NONE,)


class ScoredCandidate(BaseSchema):
    candidate: Candidate
    score: int

    @field_validator("score")
    @classmethod
    def score_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("score must be positive")
        return value

    @property
    def path(self) -> str:
        return self.candidate.path

    @property
    def is_dir(self) -> bool:
        return self.candidate.is_dir


class RankedResult(RootModel[list[ScoredCandidate]]):
    """Scored candidates in final display order."""

    root: list[ScoredCandidate] = Field(default_factory=list)

    def __iter__(self) -> Iterator[ScoredCandidate]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> ScoredCandidate:
        return self.root[index]

    def paths(self) -> list[str]:
        return [item.path for item in self.root]

    def entries(self) -> list[tuple[int, str, bool]]:
        return [(item.score, item.path, item.is_dir) for item in self.root]


class SearchConfig(BaseSchema):
    query: str
    root: str = "."
    num: int = Field(default=10, ge=0)
    files_only: bool = False
    dirs_only: bool = False
    case: CaseSensitivity = CaseSensitivity.INSENSITIVE
    parallel: bool = True
    max_workers: int | None = Field(default=None, ge=1)
    parallel_threshold: int = Field(default=2048, ge=0)
    follow_symlinks: bool = True
    show_progress: bool = False

    def to_query(self) -> Query:
        return Query(
            text=self.query,
            case=self.case,
            files_only=self.files_only,
            dirs_only=self.dirs_only,
        )
