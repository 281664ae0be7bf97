from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    # Required fields are checked by the routes so they answer 400, not 422
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateTranscriptRequest(ApiModel):
    title: str | None = None
    content: str | None = None


class CreatePromptRequest(ApiModel):
    title: str | None = None
    instruction: str | None = None


class CreateSummaryRequest(ApiModel):
    transcript_id: str | None = None
    prompt_id: str | None = None
    instruction: str | None = None


class UpdateSummaryRequest(ApiModel):
    edited_summary: str | None = None


class ShareSummaryRequest(ApiModel):
    summary_id: str | None = None
    recipients: list[str] | None = None
    sender_name: str | None = None
    custom_message: str | None = None
    transcript_title: str | None = None


class ShareSummaryResponse(ApiModel):
    success: bool = True
    message: str
    recipient_count: int
