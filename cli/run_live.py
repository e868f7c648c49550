# cli/run_live.py
# Runs a worker handler locally against the real Bedrock model and AppSync API
# configured in .env. The record must already exist in AppSync.
# Run from the repo root: python -m cli.run_live prompt <id> "<task>"
import argparse
import json

from lambdas.common.settings import get_settings
from lambdas.prompt_generator.app import handler as prompt_generator_handler
from lambdas.task_distiller.app import handler as task_distiller_handler


def main():
    parser = argparse.ArgumentParser(description="Run a meta-prompt worker locally.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    prompt_parser = subparsers.add_parser("prompt")
    prompt_parser.add_argument("prompt_id")
    prompt_parser.add_argument("task")
    prompt_parser.add_argument("-v", "--variable", action="append", default=[], dest="variables")

    task_parser = subparsers.add_parser("task")
    task_parser.add_argument("task_id")
    task_parser.add_argument("prompt_file")

    args = parser.parse_args()
    settings = get_settings()
    print(f"Using model {settings.bedrock_model} in {settings.aws_region}, AppSync at {settings.appsync_endpoint}")

    if args.command == "prompt":
        event = {"promptId": args.prompt_id, "task": args.task, "variables": args.variables}
        result = prompt_generator_handler(event, None)
    else:
        with open(args.prompt_file, "r", encoding="utf-8") as f:
            event = {"taskId": args.task_id, "originalPrompt": f.read()}
        result = task_distiller_handler(event, None)

    print("--- Result ---")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
