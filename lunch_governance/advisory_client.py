"""
Advisory Client - optional AI assistant consulted for a menu risk opinion.

Talks to an OpenAI-compatible Assistants API:
  thread -> user message -> run -> poll run status -> list messages

The client never raises to its caller. Every outcome is returned as a
value: AdvisorySuccess when the assistant produced text, otherwise
AdvisoryUnavailable carrying the reason. Polling uses asyncio.sleep so a
slow run suspends only its own request.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, Union

from openai import AsyncOpenAI

from lunch_governance.config import (
    DEFAULT_MAX_POLL_ATTEMPTS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    Settings,
)
from lunch_governance.exceptions import CredentialError

logger = logging.getLogger(__name__)

PENDING_RUN_STATUSES = frozenset({"queued", "in_progress"})
COMPLETED_RUN_STATUS = "completed"


class AdvisoryOutcome(str, Enum):
    """Why the advisory path produced no usable answer."""
    UNAVAILABLE = "unavailable"
    FAILED = "failed"
    TIMEOUT = "timeout"
    EMPTY_RESPONSE = "empty_response"


@dataclass(frozen=True)
class AdvisorySuccess:
    response_text: str
    thread_id: str
    run_id: str


@dataclass(frozen=True)
class AdvisoryUnavailable:
    outcome: AdvisoryOutcome
    detail: str = ""


AdvisoryResult = Union[AdvisorySuccess, AdvisoryUnavailable]

CredentialProvider = Callable[[], Optional[str]]
ClientFactory = Callable[[str, str], AsyncOpenAI]


def build_advisory_prompt(menu: Sequence[str]) -> str:
    """User message describing the menu and the policy it is checked against."""
    menu_text = ", ".join(menu)
    return f"""Analyze this lunch menu according to company policy: {menu_text}.

Company Policy:
1. No tobacco products (cigars, cigarettes, vapes)
2. Alcohol: beer/wine/champagne allowed, hard liquor prohibited
3. Inclusivity: need vegetarian options, avoid pork-heavy menus
4. Allergens: flag major allergens (peanuts, shellfish, tree nuts)

Provide a risk assessment (low, medium, or high) and list concerns."""


def api_key_credential(settings: Settings) -> CredentialProvider:
    """Credential provider backed by the configured API key."""
    def provide() -> str:
        if not settings.advisory_api_key:
            raise CredentialError("No advisory API key configured")
        return settings.advisory_api_key
    return provide


def default_client_factory(endpoint: str, credential: str) -> AsyncOpenAI:
    return AsyncOpenAI(base_url=endpoint, api_key=credential)


class AdvisoryClient:
    """Capability-gated wrapper around the assistant run lifecycle."""

    def __init__(
        self,
        endpoint: Optional[str],
        agent_id: Optional[str],
        credential_provider: Optional[CredentialProvider] = None,
        client_factory: ClientFactory = default_client_factory,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS,
    ):
        """
        Initialize advisory client.

        Args:
            endpoint: Base URL of the assistants API (None disables the client)
            agent_id: Assistant identifier runs are created against
            credential_provider: Returns a bearer credential or raises
            client_factory: Builds an AsyncOpenAI-compatible client
            poll_interval: Seconds between run status checks
            max_attempts: Status checks before the run counts as timed out
        """
        self.endpoint = endpoint
        self.agent_id = agent_id
        self.credential_provider = credential_provider
        self.client_factory = client_factory
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts

    @classmethod
    def from_settings(cls, settings: Settings) -> "AdvisoryClient":
        return cls(
            endpoint=settings.advisory_endpoint,
            agent_id=settings.advisory_agent_id,
            credential_provider=api_key_credential(settings),
            poll_interval=settings.poll_interval_seconds,
            max_attempts=settings.max_poll_attempts,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint and self.agent_id and self.credential_provider)

    def _acquire_credential(self, request_id: str) -> Optional[str]:
        try:
            credential = self.credential_provider()
        except Exception as e:
            logger.warning(f"[{request_id}] Advisory credential acquisition failed: {e}")
            return None
        if not credential:
            logger.warning(f"[{request_id}] Advisory credential provider returned nothing")
            return None
        return credential

    async def consult(self, menu: Sequence[str], request_id: str = "-") -> AdvisoryResult:
        """
        Ask the assistant for a risk opinion on the menu.

        Returns:
            AdvisorySuccess with the assistant text and thread/run ids, or
            AdvisoryUnavailable describing why no answer is available.
        """
        if not self.is_configured:
            logger.info(f"[{request_id}] Advisory service not configured")
            return AdvisoryUnavailable(AdvisoryOutcome.UNAVAILABLE, "configuration missing")

        credential = self._acquire_credential(request_id)
        if credential is None:
            return AdvisoryUnavailable(AdvisoryOutcome.UNAVAILABLE, "credential unavailable")

        client = None
        try:
            client = self.client_factory(self.endpoint, credential)
            return await self._run_conversation(client, menu, request_id)
        except Exception as e:
            logger.error(f"[{request_id}] Advisory call failed: {e}")
            return AdvisoryUnavailable(AdvisoryOutcome.FAILED, str(e))
        finally:
            if client is not None:
                await self._close(client, request_id)

    async def _run_conversation(self, client, menu: Sequence[str], request_id: str) -> AdvisoryResult:
        thread = await client.beta.threads.create()
        await client.beta.threads.messages.create(
            thread_id=thread.id,
            role="user",
            content=build_advisory_prompt(menu),
        )

        run = await client.beta.threads.runs.create(thread_id=thread.id, assistant_id=self.agent_id)
        logger.info(f"[{request_id}] Started advisory run {run.id} on thread {thread.id}")

        run = await self._wait_for_run(client, thread.id, run.id, request_id)

        if run.status in PENDING_RUN_STATUSES:
            logger.error(f"[{request_id}] Advisory run {run.id} timed out after {self.max_attempts} attempts")
            return AdvisoryUnavailable(AdvisoryOutcome.TIMEOUT, f"run still {run.status}")

        if run.status != COMPLETED_RUN_STATUS:
            logger.error(f"[{request_id}] Advisory run {run.id} ended with status {run.status}")
            return AdvisoryUnavailable(AdvisoryOutcome.FAILED, f"run {run.status}")

        response_text = await self._latest_assistant_text(client, thread.id)
        if not response_text:
            logger.warning(f"[{request_id}] Advisory run {run.id} produced no assistant text")
            return AdvisoryUnavailable(AdvisoryOutcome.EMPTY_RESPONSE, "no assistant response")

        logger.info(f"[{request_id}] Received advisory response ({len(response_text)} chars)")
        return AdvisorySuccess(response_text=response_text, thread_id=thread.id, run_id=run.id)

    async def _wait_for_run(self, client, thread_id: str, run_id: str, request_id: str):
        run = await client.beta.threads.runs.retrieve(thread_id=thread_id, run_id=run_id)
        attempts = 0
        while run.status in PENDING_RUN_STATUSES and attempts < self.max_attempts:
            await asyncio.sleep(self.poll_interval)
            run = await client.beta.threads.runs.retrieve(thread_id=thread_id, run_id=run_id)
            attempts += 1
            logger.debug(f"[{request_id}] Advisory run status: {run.status} (attempt {attempts}/{self.max_attempts})")
        return run

    async def _latest_assistant_text(self, client, thread_id: str) -> str:
        # Messages come back newest first.
        page = await client.beta.threads.messages.list(thread_id=thread_id)
        for message in page.data:
            if message.role != "assistant":
                continue
            for block in message.content or []:
                if getattr(block, "type", None) == "text":
                    return block.text.value or ""
            return ""
        return ""

    async def _close(self, client, request_id: str) -> None:
        close = getattr(client, "close", None)
        if close is None:
            return
        try:
            await close()
        except Exception as e:
            logger.debug(f"[{request_id}] Ignoring advisory client close error: {e}")
