from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import ErrorKind


class RankRecord(BaseModel):
    """One team's standing as rendered in the rankings table."""

    model_config = ConfigDict(frozen=True)

    # Kept as text: the table does not guarantee a contiguous integer sequence
    rank: str
    team: str
    score: str
    is_clinched: bool = False
    is_ineligible: bool = False

    @model_validator(mode="after")
    def _check_flags(self) -> "RankRecord":
        if self.is_clinched and self.is_ineligible:
            raise ValueError("A team cannot be both clinched and ineligible.")
        return self


# Ordered by standing, exactly as the source table lists the rows
RankCollection = List[RankRecord]


class ErrorRecord(BaseModel):
    """Failure shape mirroring RankRecord with null-filled record fields."""

    error_msg: str
    has_error: Literal[True] = True
    rank: Optional[str] = None
    team: Optional[str] = None
    score: Optional[str] = None
    is_clinched: Literal[False] = False
    is_ineligible: Literal[False] = False


class RankFound(BaseModel):
    """Successful lookup."""

    status: Literal["found"] = "found"
    record: RankRecord


class RankFailure(BaseModel):
    """Failed lookup or fetch."""

    status: Literal["error"] = "error"
    kind: ErrorKind
    message: str

    def to_error_record(self) -> ErrorRecord:
        return ErrorRecord(error_msg=self.message)


RankLookupResult = Annotated[
    Union[RankFound, RankFailure], Field(discriminator="status")
]
