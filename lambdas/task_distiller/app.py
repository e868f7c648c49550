# lambdas/task_distiller/app.py
import json
from typing import Any, Dict

from pydantic import ValidationError

from lambdas.common.clients import get_worker_clients
from lambdas.common.errors import InvalidRequestError
from lambdas.common.models import DistillationRequest, TaskStatus
from lambdas.common.templates import load_template
from lambdas.common.workflow import WorkflowDefinition, run_workflow

# The model continues from this assistant turn
DISTILLED_TASK_PARTIAL = "Here is the distilled task:"

UPDATE_TASK_MUTATION_WITH_DISTILLED_TASK = """
mutation UpdateTask($id: ID!, $status: TaskStatus!, $distilledTask: String) {
  updateTask(id: $id, status: $status, distilledTask: $distilledTask) {
    id
    owner
    originalPrompt
    distilledTask
    status
  }
}
"""

UPDATE_TASK_MUTATION = """
mutation UpdateTask($id: ID!, $status: TaskStatus!) {
  updateTask(id: $id, status: $status) {
    id
    owner
    originalPrompt
    distilledTask
    status
  }
}
"""

TASK_DISTILLATION = WorkflowDefinition(
    name="task",
    template=load_template("distill_task.txt"),
    placeholder="{{ORIGINAL_PROMPT}}",
    result_tag="new_prompt",
    status_mutation=UPDATE_TASK_MUTATION,
    result_mutation=UPDATE_TASK_MUTATION_WITH_DISTILLED_TASK,
    result_field="distilledTask",
    in_progress_status=TaskStatus.PROCESSING.value,
    success_status=TaskStatus.COMPLETED.value,
    error_status=TaskStatus.ERROR.value,
)


def distill_task(event: Dict[str, Any], invoker, appsync) -> Dict[str, Any]:
    """
    Recovers the short task description behind the prompt in the event.

    Raises:
        InvalidRequestError: If the event has no taskId.
    """
    task_id = event.get("taskId")
    if not task_id:
        raise InvalidRequestError("Missing required field: taskId")

    try:
        request = DistillationRequest.model_validate(event)
    except ValidationError as e:
        print(f"⚠️ Invalid distillation request for {task_id}: {e}")
        appsync.mutate(UPDATE_TASK_MUTATION, {"id": task_id, "status": TaskStatus.ERROR.value})
        return {"id": task_id, "status": TaskStatus.ERROR.value, "errorType": "ValidationError"}

    return run_workflow(TASK_DISTILLATION, request.task_id, request.original_prompt,
                        DISTILLED_TASK_PARTIAL, invoker, appsync)


def handler(event, context):
    """
    Main Lambda handler, invoked asynchronously by the request handler.
    """
    print(f"Received event: {json.dumps(event)}")
    invoker, appsync = get_worker_clients()
    return distill_task(event, invoker, appsync)
