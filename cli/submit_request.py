# cli/submit_request.py
import argparse
import json
import os
import uuid

import requests
from dotenv import load_dotenv

# Load environment variables from a .env file for local testing
load_dotenv()


def create_prompt_payload(task: str, variables: list[str] | None = None, prompt_id: str | None = None) -> dict:
    """
    Builds the body for POST /createPrompt.
    """
    return {
        "promptId": prompt_id or str(uuid.uuid4()),
        "task": task,
        "variables": list(variables or []),
    }


def create_task_payload(original_prompt: str, task_id: str | None = None) -> dict:
    """
    Builds the body for POST /createTask.
    """
    return {
        "taskId": task_id or str(uuid.uuid4()),
        "originalPrompt": original_prompt,
    }


def submit(api_url: str, route: str, payload: dict, id_token: str) -> dict:
    """
    Posts a request to the deployed API. The API expects a Cognito ID token
    in the Authorization header.

    Raises:
        requests.exceptions.RequestException: If the request fails.
    """
    response = requests.post(
        f"{api_url.rstrip('/')}/{route}",
        json=payload,
        headers={"Authorization": id_token},
        timeout=10,
    )
    response.raise_for_status()
    return response.json()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Submit a meta-prompt request to the deployed API.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    prompt_parser = subparsers.add_parser("prompt", help="Generate a meta-prompt for a task.")
    prompt_parser.add_argument("task", help="Short description of the task.")
    prompt_parser.add_argument("-v", "--variable", action="append", default=[], dest="variables",
                               help="Input variable the prompt should use (repeatable).")
    prompt_parser.add_argument("--id", dest="record_id", help="Existing prompt record id.")

    task_parser = subparsers.add_parser("task", help="Distill the task behind an existing prompt.")
    task_parser.add_argument("prompt_file", help="File holding the original prompt.")
    task_parser.add_argument("--id", dest="record_id", help="Existing task record id.")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    api_url = os.environ.get("METAPROMPT_API")
    id_token = os.environ.get("COGNITO_ID_TOKEN")
    if not (api_url and id_token):
        print("❌ ERROR: METAPROMPT_API and COGNITO_ID_TOKEN must be set. Please create a .env file.")
        return 1

    if args.command == "prompt":
        route, payload = "createPrompt", create_prompt_payload(args.task, args.variables, args.record_id)
    else:
        with open(args.prompt_file, "r", encoding="utf-8") as f:
            route, payload = "createTask", create_task_payload(f.read(), args.record_id)

    print(f"--- Sending {route} request ---")
    print(json.dumps(payload, indent=2))

    try:
        result = submit(api_url, route, payload, id_token)
    except requests.exceptions.RequestException as e:
        print(f"\n❌ Failed to submit request.")
        print(f"Error: {e}")
        return 1

    print("\n✅ Success! Request accepted.")
    print(f"Response Body: {json.dumps(result)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
