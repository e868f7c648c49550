# lambdas/common/models.py
"""
Pydantic models for the invocation payloads and the status values kept on AppSync.
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class PromptStatus(str, Enum):
    PENDING = "PENDING"
    GENERATING = "GENERATING"
    GENERATED = "GENERATED"
    ERROR = "ERROR"


class TaskStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


class GenerationRequest(BaseModel):
    """
    Payload for the prompt generator: write a meta-prompt for a task.
    """
    model_config = ConfigDict(populate_by_name=True)

    prompt_id: str = Field(..., alias="promptId", min_length=1)
    task: str = Field(..., min_length=1)
    # names of the template variables the generated prompt should use
    variables: List[str] = Field(default_factory=list)


class DistillationRequest(BaseModel):
    """
    Payload for the task distiller: recover the task behind an existing prompt.
    """
    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(..., alias="taskId", min_length=1)
    original_prompt: str = Field(..., alias="originalPrompt", min_length=1)
