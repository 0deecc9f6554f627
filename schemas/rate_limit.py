from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class RateLimitOk(BaseModel):
    status: Literal["ok"] = "ok"


class RateLimitExceeded(BaseModel):
    status: Literal["exceeded"] = "exceeded"
    try_again_at: int  # epoch millis
    count: int


RateLimitResult = Annotated[Union[RateLimitOk, RateLimitExceeded], Field(discriminator="status")]

rate_limit_result_adapter = TypeAdapter(RateLimitResult)


class RateLimitError(BaseModel):
    message: str
    try_again_at: int
    number_of_generations: int
