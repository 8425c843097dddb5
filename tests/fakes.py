"""
Test doubles for the advisory service.

FakeAssistantClient mimics the slice of the AsyncOpenAI surface the
advisory client uses: beta.threads.{create, messages.create, messages.list,
runs.create, runs.retrieve} plus close().
"""

from __future__ import annotations

from types import SimpleNamespace

from lunch_governance.advisory_client import AdvisoryClient


def assistant_message(text: str) -> SimpleNamespace:
    block = SimpleNamespace(type="text", text=SimpleNamespace(value=text))
    return SimpleNamespace(role="assistant", content=[block])


def user_message(text: str) -> SimpleNamespace:
    block = SimpleNamespace(type="text", text=SimpleNamespace(value=text))
    return SimpleNamespace(role="user", content=[block])


class FakeAssistantClient:
    """Scripted run statuses and message list; optional failure point."""

    def __init__(
        self,
        run_statuses: list[str] | None = None,
        messages: list | None = None,
        error_on: str | None = None,
    ) -> None:
        self.run_statuses = run_statuses or ["completed"]
        self.messages = messages if messages is not None else []
        self.error_on = error_on
        self.retrieve_calls = 0
        self.submitted_prompts: list[str] = []
        self.closed = False
        self.beta = SimpleNamespace(
            threads=SimpleNamespace(
                create=self._create_thread,
                messages=SimpleNamespace(create=self._create_message, list=self._list_messages),
                runs=SimpleNamespace(create=self._create_run, retrieve=self._retrieve_run),
            )
        )

    def _maybe_fail(self, operation: str) -> None:
        if self.error_on == operation:
            raise RuntimeError(f"{operation} exploded")

    async def _create_thread(self):
        self._maybe_fail("thread")
        return SimpleNamespace(id="thread_123")

    async def _create_message(self, thread_id: str, role: str, content: str):
        self._maybe_fail("message")
        self.submitted_prompts.append(content)
        return SimpleNamespace(id="msg_1", thread_id=thread_id, role=role)

    async def _create_run(self, thread_id: str, assistant_id: str):
        self._maybe_fail("run")
        return SimpleNamespace(id="run_456", status="queued", assistant_id=assistant_id)

    async def _retrieve_run(self, thread_id: str, run_id: str):
        self._maybe_fail("retrieve")
        index = min(self.retrieve_calls, len(self.run_statuses) - 1)
        self.retrieve_calls += 1
        return SimpleNamespace(id=run_id, status=self.run_statuses[index])

    async def _list_messages(self, thread_id: str):
        self._maybe_fail("list")
        return SimpleNamespace(data=self.messages)

    async def close(self) -> None:
        self.closed = True


def make_advisory_client(
    fake: FakeAssistantClient,
    credential: str | None = "secret",
    max_attempts: int = 3,
    endpoint: str | None = "https://advisory.example/v1",
    agent_id: str | None = "asst_lunch",
) -> AdvisoryClient:
    """AdvisoryClient wired to a fake, with zero poll interval."""
    factory_calls = []

    def factory(url: str, token: str):
        factory_calls.append((url, token))
        return fake

    client = AdvisoryClient(
        endpoint=endpoint,
        agent_id=agent_id,
        credential_provider=lambda: credential,
        client_factory=factory,
        poll_interval=0,
        max_attempts=max_attempts,
    )
    client.factory_calls = factory_calls
    return client
