from typing import List, Optional
from pydantic import BaseModel


class CompletionMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class CompletionChoice(BaseModel):
    message: Optional[CompletionMessage] = None


class ChatCompletion(BaseModel):
    choices: List[CompletionChoice] = []

    def first_text(self) -> Optional[str]:
        if not self.choices or self.choices[0].message is None:
            return None
        return self.choices[0].message.content or None
