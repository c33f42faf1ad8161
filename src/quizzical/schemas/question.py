"""
Domain values for questions and their choices.

These are plain pydantic models, detached from the ORM session: repositories
build them from rows and hand them out, callers build them from request bodies
and hand them in. `id` is None until the store has assigned one.
"""

from pydantic import BaseModel, Field


class Choice(BaseModel):
    id: int | None = None
    title: str = Field(min_length=1)
    correct: bool = False


class Question(BaseModel):
    id: int | None = None
    text: str = Field(min_length=1)
    category: str = Field(min_length=1)
    # Order matters: choices are stored and returned in the order given here.
    # Non-emptiness is a write rule (validate_question); reads attach [] to a question with no choices.
    choices: list[Choice]
