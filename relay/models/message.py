from pydantic import BaseModel, Field


class SendMessage(BaseModel):
    # Discord snowflake
    channel_id: str = Field(pattern=r"^\d+$")
    url: str


class SendResult(BaseModel):
    status: str = "ok"
