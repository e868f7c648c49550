# lambdas/request_handler/app.py
import json
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from lambdas.common.errors import InvalidRequestError
from lambdas.common.models import DistillationRequest, GenerationRequest
from lambdas.common.settings import get_settings

# API path -> (payload model, settings attribute holding the worker function name)
ROUTES = {
    "/createPrompt": (GenerationRequest, "prompt_generator_function"),
    "/createTask": (DistillationRequest, "task_distiller_function"),
}


@lru_cache(maxsize=1)
def get_lambda_client():
    return boto3.client("lambda", region_name=get_settings().aws_region)


def build_response(status_code: int, body: dict) -> dict:
    """Helper function to build the API Gateway proxy response."""
    return {
        'statusCode': status_code,
        'headers': {
            'Content-Type': 'application/json',
            'Access-Control-Allow-Origin': get_settings().allowed_origin,
        },
        'body': json.dumps(body)
    }


def get_route(event: dict) -> str:
    return event.get('resource') or event.get('path') or ''


def parse_request(event: dict):
    """
    Works out which route was called and validates the JSON body against it.

    Returns:
        A tuple of (route path, validated payload model).

    Raises:
        InvalidRequestError: If the body is missing, not JSON or fails validation.
    """
    path = get_route(event)
    model, _ = ROUTES[path]

    raw_body = event.get('body')
    if not raw_body:
        raise InvalidRequestError('Request body cannot be empty.')
    try:
        body = json.loads(raw_body)
    except json.JSONDecodeError:
        raise InvalidRequestError('Request body must be valid JSON.')
    if not isinstance(body, dict):
        raise InvalidRequestError('Request body must be a JSON object.')

    try:
        return path, model.model_validate(body)
    except ValidationError as e:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
        raise InvalidRequestError(f'Invalid request fields: {fields}')


def dispatch(path: str, payload, lambda_client) -> str:
    """
    Invokes the worker lambda for the route asynchronously and returns the record id.
    """
    _, function_setting = ROUTES[path]
    function_name = getattr(get_settings(), function_setting)
    if not function_name:
        raise RuntimeError(f"Worker function for {path} is not configured.")

    worker_event = payload.model_dump(by_alias=True)
    print(f"Invoking {function_name} asynchronously with: {json.dumps(worker_event)}")
    lambda_client.invoke(
        FunctionName=function_name,
        InvocationType='Event',
        Payload=json.dumps(worker_event).encode('utf-8'),
    )
    return worker_event.get('promptId') or worker_event.get('taskId')


def handler(event: dict, context: object) -> dict:
    """
    API Gateway handler for POST /createPrompt and POST /createTask.
    Validates the request and hands it to the matching worker lambda.
    """
    print(f"Received event: {json.dumps(event)}")

    claims = ((event.get('requestContext') or {}).get('authorizer') or {}).get('claims') or {}
    if claims:
        print(f"Request from Cognito user: {claims.get('sub')}")

    if get_route(event) not in ROUTES:
        print(f"⚠️ Unknown route: {get_route(event)}")
        return build_response(404, {'message': 'Not found.'})

    try:
        path, payload = parse_request(event)
        record_id = dispatch(path, payload, get_lambda_client())
        return build_response(202, {'id': record_id, 'status': 'Request accepted for processing'})

    except InvalidRequestError as e:
        print(f"Validation Error: {e}")
        return build_response(400, {'message': str(e)})

    except (BotoCoreError, ClientError, RuntimeError) as e:
        print(f"Internal Server Error: {e}")
        # don't expose internal error details to the client
        return build_response(500, {'message': 'An internal server error occurred.'})
