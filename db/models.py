from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

SYSTEM_OWNER = "system"


class Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str


class Transcript(Record):
    title: str
    content: str
    uploaded_at: datetime
    user_id: str | None = None


class Prompt(Record):
    title: str
    instruction: str
    created_at: datetime
    user_id: str | None = None


class Summary(Record):
    transcript_id: str
    prompt_id: str
    original_summary: str
    edited_summary: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @property
    def effective_content(self) -> str:
        """The edited text when one was saved, otherwise the generated one."""
        if self.edited_summary is not None:
            return self.edited_summary
        return self.original_summary


class EmailShareRecord(Record):
    summary_id: str
    recipient_email: str
    sender_name: str | None = None
    sent_at: datetime
