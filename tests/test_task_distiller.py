# tests/test_task_distiller.py
from unittest.mock import MagicMock, patch

import pytest

from lambdas.common.errors import InferenceError, InvalidRequestError
from lambdas.task_distiller import app as task_distiller_app


@pytest.fixture
def appsync() -> MagicMock:
    appsync = MagicMock()
    appsync.mutate.return_value = {}
    return appsync


@pytest.fixture
def invoker() -> MagicMock:
    invoker = MagicMock()
    invoker.invoke.return_value = "<new_prompt>  Write a haiku.  </new_prompt>"
    return invoker


def test_distilled_task_is_trimmed_and_stored(invoker, appsync):
    event = {"taskId": "t1", "originalPrompt": "You are a poet. Write a haiku about autumn."}

    result = task_distiller_app.distill_task(event, invoker, appsync)

    assert result == {"id": "t1", "status": "COMPLETED", "distilledTask": "Write a haiku."}
    user_prompt, assistant_partial = invoker.invoke.call_args.args
    assert "You are a poet. Write a haiku about autumn." in user_prompt
    assert "{{ORIGINAL_PROMPT}}" not in user_prompt
    assert assistant_partial == "Here is the distilled task:"
    assert appsync.mutate.call_args_list[-1].args[1] == {
        "id": "t1", "status": "COMPLETED", "distilledTask": "Write a haiku."
    }


def test_status_sequence_on_success(invoker, appsync):
    task_distiller_app.distill_task({"taskId": "t1", "originalPrompt": "p"}, invoker, appsync)

    statuses = [c.args[1]["status"] for c in appsync.mutate.call_args_list]
    assert statuses == ["PROCESSING", "COMPLETED"]


def test_inference_failure_marks_error_once(invoker, appsync):
    invoker.invoke.side_effect = InferenceError("AccessDenied")

    result = task_distiller_app.distill_task({"taskId": "t1", "originalPrompt": "p"}, invoker, appsync)

    assert result == {"id": "t1", "status": "ERROR", "errorType": "InferenceError"}
    statuses = [c.args[1]["status"] for c in appsync.mutate.call_args_list]
    assert statuses == ["PROCESSING", "ERROR"]
    assert all("distilledTask" not in c.args[1] for c in appsync.mutate.call_args_list)


def test_empty_original_prompt_marks_error(invoker, appsync):
    result = task_distiller_app.distill_task({"taskId": "t1", "originalPrompt": ""}, invoker, appsync)

    assert result["status"] == "ERROR"
    invoker.invoke.assert_not_called()


def test_payload_without_id_is_rejected(invoker, appsync):
    with pytest.raises(InvalidRequestError):
        task_distiller_app.distill_task({"originalPrompt": "p"}, invoker, appsync)


def test_handler_uses_process_clients(invoker, appsync):
    with patch.object(task_distiller_app, "get_worker_clients", return_value=(invoker, appsync)):
        result = task_distiller_app.handler({"taskId": "t1", "originalPrompt": "p"}, None)
    assert result["status"] == "COMPLETED"
