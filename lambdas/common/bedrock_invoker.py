# lambdas/common/bedrock_invoker.py
import json
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from lambdas.common.errors import InferenceError, InvalidCompletionError

ANTHROPIC_VERSION = "bedrock-2023-05-31"


class BedrockInvoker:
    """
    Sends a user turn plus an assistant partial to a Bedrock model and returns the completion text.

    The request body is built for the model family of the configured model id,
    so swapping BEDROCK_MODEL between Claude and Nova needs no code change.
    Unlike a summarizer there is no fallback text here: every failure is raised
    and the caller decides what status to report.
    """
    def __init__(self, bedrock_runtime, model_id: str, max_tokens: int = 8192, temperature: float = 0.0):
        self.bedrock_runtime = bedrock_runtime
        self.model_id = model_id
        self.max_tokens = max_tokens
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings) -> "BedrockInvoker":
        """Creates the bedrock-runtime client for the configured region."""
        bedrock_runtime = boto3.client(service_name="bedrock-runtime", region_name=settings.aws_region)
        return cls(
            bedrock_runtime,
            model_id=settings.bedrock_model,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
        )

    def invoke(self, user_prompt: str, assistant_partial: str = "") -> str:
        """
        Runs one completion and returns the generated text.

        Raises:
            InferenceError: If the Bedrock call fails.
            InvalidCompletionError: If the response carries no text.
        """
        request_body = self.build_request_body(user_prompt, assistant_partial)

        try:
            response = self.bedrock_runtime.invoke_model(
                modelId=self.model_id,
                body=json.dumps(request_body),
                accept="application/json",
                contentType="application/json",
            )
        except (BotoCoreError, ClientError) as e:
            raise InferenceError(f"Bedrock API call failed: {e}") from e

        try:
            response_body = json.loads(response["body"].read())
        except (KeyError, AttributeError, TypeError, ValueError) as e:
            raise InvalidCompletionError(f"Could not read Bedrock response body: {e}") from e
        print(f"Bedrock response body: {json.dumps(response_body)}")

        completion = self._extract_text_from_response(response_body)
        if completion is None:
            raise InvalidCompletionError(f"Could not find completion text in Bedrock response: {response_body}")
        return completion

    def build_request_body(self, user_prompt: str, assistant_partial: str = "") -> Dict[str, Any]:
        """
        Returns the exact JSON payload required by the current model family.
        Sampling is deterministic (temperature 0 by default).
        """
        if self.model_id.startswith("amazon.nova"):
            # Schema for Amazon Nova models
            messages = [{"role": "user", "content": [{"text": user_prompt}]}]
            if assistant_partial:
                messages.append({"role": "assistant", "content": [{"text": assistant_partial}]})
            return {
                "messages": messages,
                "inferenceConfig": {
                    "maxTokens": self.max_tokens,
                    "temperature": self.temperature,
                },
            }

        # Default to the schema for Anthropic Claude models
        messages = [{"role": "user", "content": user_prompt}]
        if assistant_partial:
            messages.append({"role": "assistant", "content": assistant_partial})
        return {
            "messages": messages,
            "anthropic_version": ANTHROPIC_VERSION,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    @staticmethod
    def _extract_text_from_response(body: Dict[str, Any]) -> Optional[str]:
        """
        Safely extracts the assistant's reply text from the Claude or Nova
        response structures. Returns None when neither shape matches.
        """
        # Claude-family (Anthropic)
        content = body.get("content")
        if isinstance(content, list) and content:
            first = content[0]
            if isinstance(first, dict) and isinstance(first.get("text"), str):
                return first["text"]

        # Amazon Nova (InvokeModel)
        if "output" in body:
            blocks = (
                body.get("output", {})
                .get("message", {})
                .get("content", [])
            )
            for block in blocks:
                if isinstance(block, dict) and isinstance(block.get("text"), str):
                    return block["text"]
        return None
