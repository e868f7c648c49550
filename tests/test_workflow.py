# tests/test_workflow.py
from unittest.mock import MagicMock

import pytest

from lambdas.common.errors import GraphQLError, InferenceError
from lambdas.common.workflow import WorkflowDefinition, run_workflow

DEFINITION = WorkflowDefinition(
    name="thing",
    template="Please handle: {{VALUE}}",
    placeholder="{{VALUE}}",
    result_tag="answer",
    status_mutation="STATUS",
    result_mutation="RESULT",
    result_field="answer",
    in_progress_status="WORKING",
    success_status="DONE",
    error_status="ERROR",
)


@pytest.fixture
def appsync() -> MagicMock:
    appsync = MagicMock()
    appsync.mutate.return_value = {}
    return appsync


def mutation_calls(appsync: MagicMock) -> list:
    return [(c.args[0], c.args[1]) for c in appsync.mutate.call_args_list]


def test_success_marks_in_progress_then_stores_result(appsync):
    invoker = MagicMock()
    invoker.invoke.return_value = "<answer> 42 </answer>"

    result = run_workflow(DEFINITION, "r1", "the question", "partial", invoker, appsync)

    assert result == {"id": "r1", "status": "DONE", "answer": "42"}
    invoker.invoke.assert_called_once_with("Please handle: the question", "partial")
    assert mutation_calls(appsync) == [
        ("STATUS", {"id": "r1", "status": "WORKING"}),
        ("RESULT", {"id": "r1", "status": "DONE", "answer": "42"}),
    ]


def test_status_is_in_progress_before_the_model_is_called(appsync):
    seen = []
    invoker = MagicMock()
    invoker.invoke.side_effect = lambda *args: seen.append(len(appsync.mutate.call_args_list)) or "<answer>x</answer>"

    run_workflow(DEFINITION, "r1", "q", "", invoker, appsync)

    assert seen == [1]


@pytest.mark.parametrize("failure", [
    InferenceError("throttled"),
    "no tags in this completion",
    12345,
])
def test_any_failure_ends_in_exactly_one_error_mutation(appsync, failure):
    invoker = MagicMock()
    if isinstance(failure, Exception):
        invoker.invoke.side_effect = failure
    else:
        invoker.invoke.return_value = failure

    result = run_workflow(DEFINITION, "r1", "q", "", invoker, appsync)

    assert result["status"] == "ERROR"
    calls = mutation_calls(appsync)
    assert calls[-1] == ("STATUS", {"id": "r1", "status": "ERROR"})
    assert [c for c in calls if c[1]["status"] == "ERROR"] == [calls[-1]]
    assert not [c for c in calls if c[0] == "RESULT"]


def test_error_type_is_reported(appsync):
    invoker = MagicMock()
    invoker.invoke.return_value = "nothing useful"

    result = run_workflow(DEFINITION, "r1", "q", "", invoker, appsync)

    assert result == {"id": "r1", "status": "ERROR", "errorType": "MissingTagError"}


def test_failed_in_progress_update_still_reports_error(appsync):
    appsync.mutate.side_effect = [GraphQLError("down"), {}]
    invoker = MagicMock()

    result = run_workflow(DEFINITION, "r1", "q", "", invoker, appsync)

    assert result["errorType"] == "GraphQLError"
    invoker.invoke.assert_not_called()
    assert mutation_calls(appsync)[-1] == ("STATUS", {"id": "r1", "status": "ERROR"})


def test_failed_error_update_propagates(appsync):
    appsync.mutate.side_effect = GraphQLError("down")

    with pytest.raises(GraphQLError):
        run_workflow(DEFINITION, "r1", "q", "", MagicMock(), appsync)
