# tests/test_settings.py
from lambdas.common.settings import DEFAULT_BEDROCK_MODEL, AppSettings


def test_defaults(monkeypatch):
    for name in ("BEDROCK_MODEL", "MAX_TOKENS", "TEMPERATURE", "AWS_REGION"):
        monkeypatch.delenv(name, raising=False)

    settings = AppSettings(_env_file=None)

    assert settings.bedrock_model == DEFAULT_BEDROCK_MODEL
    assert settings.max_tokens == 8192
    assert settings.temperature == 0
    assert settings.aws_region == "us-east-1"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("APPSYNC_ENDPOINT", "https://example.com/graphql")
    monkeypatch.setenv("APPSYNC_API_KEY", "da2-key")
    monkeypatch.setenv("BEDROCK_MODEL", "anthropic.claude-3-haiku-20240307-v1:0")
    monkeypatch.setenv("MAX_TOKENS", "1024")

    settings = AppSettings(_env_file=None)

    assert settings.appsync_endpoint == "https://example.com/graphql"
    assert settings.appsync_api_key == "da2-key"
    assert settings.bedrock_model == "anthropic.claude-3-haiku-20240307-v1:0"
    assert settings.max_tokens == 1024
