# lambdas/prompt_generator/app.py
import json
from typing import Any, Dict

from pydantic import ValidationError

from lambdas.common.clients import get_worker_clients
from lambdas.common.errors import InvalidRequestError
from lambdas.common.models import GenerationRequest, PromptStatus
from lambdas.common.templates import build_assistant_partial, load_template
from lambdas.common.workflow import WorkflowDefinition, run_workflow

UPDATE_PROMPT_MUTATION_WITH_PROMPT = """
mutation UpdatePrompt($id: ID!, $status: PromptStatus!, $prompt: String) {
  updatePrompt(id: $id, status: $status, prompt: $prompt) {
    id
    owner
    prompt
    status
    task
    variables
  }
}
"""

UPDATE_PROMPT_MUTATION = """
mutation UpdatePrompt($id: ID!, $status: PromptStatus!) {
  updatePrompt(id: $id, status: $status) {
    id
    owner
    prompt
    status
    task
    variables
  }
}
"""

PROMPT_GENERATION = WorkflowDefinition(
    name="prompt",
    template=load_template("metaprompt.txt"),
    placeholder="{{TASK}}",
    result_tag="Instructions",
    status_mutation=UPDATE_PROMPT_MUTATION,
    result_mutation=UPDATE_PROMPT_MUTATION_WITH_PROMPT,
    result_field="prompt",
    in_progress_status=PromptStatus.GENERATING.value,
    success_status=PromptStatus.GENERATED.value,
    error_status=PromptStatus.ERROR.value,
    collapse_empty_tags=True,
)


def generate_prompt(event: Dict[str, Any], invoker, appsync) -> Dict[str, Any]:
    """
    Writes a meta-prompt for the task in the event and stores it on the prompt record.

    Raises:
        InvalidRequestError: If the event has no promptId, so no record can be marked.
    """
    prompt_id = event.get("promptId")
    if not prompt_id:
        raise InvalidRequestError("Missing required field: promptId")

    try:
        request = GenerationRequest.model_validate(event)
    except ValidationError as e:
        print(f"⚠️ Invalid generation request for {prompt_id}: {e}")
        appsync.mutate(UPDATE_PROMPT_MUTATION, {"id": prompt_id, "status": PromptStatus.ERROR.value})
        return {"id": prompt_id, "status": PromptStatus.ERROR.value, "errorType": "ValidationError"}

    assistant_partial = build_assistant_partial(request.variables)
    return run_workflow(PROMPT_GENERATION, request.prompt_id, request.task, assistant_partial, invoker, appsync)


def handler(event, context):
    """
    Main Lambda handler, invoked asynchronously by the request handler.
    """
    print(f"Received event: {json.dumps(event)}")
    invoker, appsync = get_worker_clients()
    return generate_prompt(event, invoker, appsync)
