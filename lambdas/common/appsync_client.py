# lambdas/common/appsync_client.py
from typing import Any, Dict, Optional

import requests

from lambdas.common.errors import GraphQLError


class AppSyncClient:
    """
    Minimal GraphQL client for an AppSync API secured with an API key.
    """
    def __init__(self, endpoint: str, api_key: str, timeout: float = 30.0, session: Optional[requests.Session] = None):
        if not endpoint:
            raise ValueError("AppSync endpoint is not configured.")
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "x-api-key": api_key or "",
        })

    @classmethod
    def from_settings(cls, settings) -> "AppSyncClient":
        return cls(
            settings.appsync_endpoint,
            settings.appsync_api_key,
            timeout=settings.appsync_timeout_seconds,
        )

    def mutate(self, mutation: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        Sends a GraphQL mutation and returns its "data" object.

        Raises:
            GraphQLError: On HTTP/network failure or if the response carries GraphQL errors.
        """
        try:
            response = self.session.post(
                self.endpoint,
                json={"query": mutation, "variables": variables},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except requests.exceptions.RequestException as e:
            raise GraphQLError(f"AppSync request failed: {e}") from e
        except ValueError as e:
            raise GraphQLError(f"AppSync returned a non-JSON response: {e}") from e

        if not isinstance(body, dict):
            raise GraphQLError(f"AppSync returned an unexpected response: {body!r}")

        errors = body.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            messages = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in errors
            )
            raise GraphQLError(f"AppSync returned errors: {messages}", errors)
        return body.get("data") or {}
