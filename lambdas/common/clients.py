# lambdas/common/clients.py
from functools import lru_cache
from typing import Tuple

from lambdas.common.appsync_client import AppSyncClient
from lambdas.common.bedrock_invoker import BedrockInvoker
from lambdas.common.settings import get_settings


# Built on the first invocation and reused by warm Lambda invocations.
@lru_cache(maxsize=1)
def get_worker_clients() -> Tuple[BedrockInvoker, AppSyncClient]:
    settings = get_settings()
    try:
        invoker = BedrockInvoker.from_settings(settings)
        appsync = AppSyncClient.from_settings(settings)
    except ValueError as e:
        # This will fail the invocation, which is appropriate for missing config.
        print(f"FATAL: Lambda is not configured correctly: {e}")
        raise
    return invoker, appsync
