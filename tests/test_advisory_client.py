"""
Unit tests for the advisory client.
Demonstrates: fake assistants API injected through client_factory, every
non-success path reported as a value instead of an exception.
"""
from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from lunch_governance.advisory_client import (
    AdvisoryClient,
    AdvisoryOutcome,
    AdvisorySuccess,
    AdvisoryUnavailable,
    api_key_credential,
    build_advisory_prompt,
)
from lunch_governance.config import Settings
from lunch_governance.exceptions import CredentialError
from tests.fakes import FakeAssistantClient, assistant_message, make_advisory_client, user_message

MENU = ["Garden salad", "Peanut butter cookies"]


def consult(client: AdvisoryClient):
    return asyncio.run(client.consult(MENU, request_id="test"))


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------


def test_success_returns_text_and_ids() -> None:
    fake = FakeAssistantClient(
        run_statuses=["queued", "in_progress", "completed"],
        messages=[assistant_message("High risk: peanut"), user_message("Analyze this lunch menu")],
    )
    result = consult(make_advisory_client(fake))

    assert result == AdvisorySuccess(response_text="High risk: peanut", thread_id="thread_123", run_id="run_456")
    assert fake.retrieve_calls == 3
    assert fake.closed
    assert "Peanut butter cookies" in fake.submitted_prompts[0]


def test_success_uses_latest_assistant_message() -> None:
    fake = FakeAssistantClient(
        messages=[user_message("follow-up"), assistant_message("newest"), assistant_message("older")],
    )
    result = consult(make_advisory_client(fake))
    assert isinstance(result, AdvisorySuccess)
    assert result.response_text == "newest"


def test_completion_on_last_allowed_attempt_is_success() -> None:
    fake = FakeAssistantClient(
        run_statuses=["queued", "queued", "queued", "completed"],
        messages=[assistant_message("Low risk")],
    )
    result = consult(make_advisory_client(fake, max_attempts=3))
    assert isinstance(result, AdvisorySuccess)


# ---------------------------------------------------------------------------
# Unavailable before any network call
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("endpoint, agent_id", [(None, "asst_lunch"), ("https://advisory.example/v1", None), (None, None)])
def test_missing_configuration_is_unavailable(endpoint, agent_id) -> None:
    fake = FakeAssistantClient()
    client = make_advisory_client(fake, endpoint=endpoint, agent_id=agent_id)

    result = consult(client)

    assert result.outcome == AdvisoryOutcome.UNAVAILABLE
    assert client.factory_calls == []
    assert not client.is_configured


def test_credential_failure_is_unavailable() -> None:
    calls = []

    def failing_credential():
        raise CredentialError("token endpoint unreachable")

    client = AdvisoryClient(
        endpoint="https://advisory.example/v1",
        agent_id="asst_lunch",
        credential_provider=failing_credential,
        client_factory=lambda url, token: calls.append(url),
        poll_interval=0,
    )
    result = consult(client)

    assert result == AdvisoryUnavailable(AdvisoryOutcome.UNAVAILABLE, "credential unavailable")
    assert calls == []


def test_empty_credential_is_unavailable() -> None:
    fake = FakeAssistantClient()
    client = make_advisory_client(fake, credential="")
    result = consult(client)
    assert result.outcome == AdvisoryOutcome.UNAVAILABLE
    assert client.factory_calls == []


def test_api_key_credential_requires_key() -> None:
    with pytest.raises(CredentialError):
        api_key_credential(Settings())()
    assert api_key_credential(Settings(advisory_api_key="k"))() == "k"


# ---------------------------------------------------------------------------
# Run failures
# ---------------------------------------------------------------------------


def test_timeout_when_run_never_finishes() -> None:
    fake = FakeAssistantClient(run_statuses=["queued", "in_progress"])
    result = consult(make_advisory_client(fake, max_attempts=3))

    assert result.outcome == AdvisoryOutcome.TIMEOUT
    # initial status check + one per attempt
    assert fake.retrieve_calls == 4
    assert fake.closed


@pytest.mark.parametrize("status", ["failed", "cancelled", "expired", "incomplete"])
def test_terminal_failure_statuses(status: str) -> None:
    fake = FakeAssistantClient(run_statuses=["in_progress", status], messages=[assistant_message("x")])
    result = consult(make_advisory_client(fake))
    assert result.outcome == AdvisoryOutcome.FAILED


@pytest.mark.parametrize(
    "messages",
    [
        [],
        [user_message("only the prompt")],
        [assistant_message("")],
        [SimpleNamespace(role="assistant", content=[SimpleNamespace(type="image_file")])],
    ],
)
def test_completed_without_assistant_text_is_empty_response(messages) -> None:
    fake = FakeAssistantClient(messages=messages)
    result = consult(make_advisory_client(fake))
    assert result.outcome == AdvisoryOutcome.EMPTY_RESPONSE


@pytest.mark.parametrize("operation", ["thread", "message", "run", "retrieve", "list"])
def test_transport_errors_collapse_to_failed(operation: str) -> None:
    fake = FakeAssistantClient(messages=[assistant_message("Low risk")], error_on=operation)
    result = consult(make_advisory_client(fake))

    assert isinstance(result, AdvisoryUnavailable)
    assert result.outcome == AdvisoryOutcome.FAILED
    assert f"{operation} exploded" in result.detail
    assert fake.closed


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_from_settings_copies_poll_policy() -> None:
    settings = Settings(
        advisory_endpoint="https://advisory.example/v1",
        advisory_agent_id="asst_lunch",
        advisory_api_key="k",
        poll_interval_seconds=0.25,
        max_poll_attempts=7,
    )
    client = AdvisoryClient.from_settings(settings)
    assert client.is_configured
    assert client.poll_interval == 0.25
    assert client.max_attempts == 7


def test_prompt_lists_menu_and_policy() -> None:
    prompt = build_advisory_prompt(MENU)
    assert "Garden salad, Peanut butter cookies" in prompt
    assert "hard liquor prohibited" in prompt
    assert "low, medium, or high" in prompt
