# lambdas/common/workflow.py
"""
The status → prompt → model → extract → status pipeline shared by both worker lambdas.

Each worker describes itself with a WorkflowDefinition; run_workflow drives the
record through IN_PROGRESS to either the success status or ERROR.
"""
import json
from dataclasses import dataclass
from typing import Any, Dict

from lambdas.common.tags import extract_tag
from lambdas.common.templates import render_template


@dataclass(frozen=True)
class WorkflowDefinition:
    name: str
    template: str
    placeholder: str
    result_tag: str
    # GraphQL mutation taking ($id, $status)
    status_mutation: str
    # GraphQL mutation taking ($id, $status, $<result_field>)
    result_mutation: str
    result_field: str
    in_progress_status: str
    success_status: str
    error_status: str
    collapse_empty_tags: bool = False


def run_workflow(definition: WorkflowDefinition, record_id: str, value: str,
                 assistant_partial: str, invoker, appsync) -> Dict[str, Any]:
    """
    Runs one invocation for a record and reports its progress to AppSync.

    Any failure after the record id is known ends in exactly one ERROR status
    mutation and no result mutation. If that ERROR mutation fails too, the
    exception propagates so the invocation itself fails.

    Returns:
        A summary dict with the record id, final status and either the
        result or the error type.
    """
    try:
        print(f"Updating AppSync with {definition.name} id: {record_id} and status: {definition.in_progress_status}")
        in_progress_response = appsync.mutate(
            definition.status_mutation,
            {"id": record_id, "status": definition.in_progress_status},
        )
        print(f"In-progress response: {json.dumps(in_progress_response, indent=2)}")

        user_prompt = render_template(definition.template, definition.placeholder, value)
        print(f"Rendered prompt: {user_prompt}")
        print(f"Assistant partial: \n{assistant_partial}")

        completion = invoker.invoke(user_prompt, assistant_partial)
        result = extract_tag(completion, definition.result_tag, collapse_empty=definition.collapse_empty_tags)
        print(f"Extracted <{definition.result_tag}>: \n{json.dumps(result, indent=2)}")

        print(f"Updating AppSync with {definition.name} id: {record_id} and status: {definition.success_status}")
        final_response = appsync.mutate(
            definition.result_mutation,
            {"id": record_id, "status": definition.success_status, definition.result_field: result},
        )
        print(f"✅ Final response: {json.dumps(final_response, indent=2)}")
        return {"id": record_id, "status": definition.success_status, definition.result_field: result}

    except Exception as e:
        error_type = type(e).__name__
        print(f"❌ Error running {definition.name} workflow for {record_id} ({error_type}): {e}")
        appsync.mutate(
            definition.status_mutation,
            {"id": record_id, "status": definition.error_status},
        )
        return {"id": record_id, "status": definition.error_status, "errorType": error_type}
