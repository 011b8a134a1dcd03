from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CodeSnippet(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    code: str
    language: str
    ai_assisted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateCodeSnippetRequest(BaseModel):
    title: str = Field(min_length=1)
    code: str
    language: str = Field(min_length=1)
    ai_assisted: bool = False
