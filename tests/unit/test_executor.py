"""Executor: ordering under concurrency, per-file isolation, not-found paths."""

import asyncio

import pytest

from resume_intake.config import FrozenConfig
from resume_intake.core.types import ExtractionState, SegmentStatus, Tier
from resume_intake.exceptions import InputError, ResourceNotFoundError
from resume_intake.executor import create_executor
from resume_intake.files.store import InMemoryDocumentStore
from resume_intake.frontdoor import ParseRequest
from resume_intake.pipeline.corpus import segment_boundaries
from tests.helpers import build_docx


class SlowStore(InMemoryDocumentStore):
    """In-memory store whose fetches finish after a per-path delay."""

    def __init__(self, documents, delays):
        super().__init__(documents)
        self.delays = delays
        self.completed: list[str] = []

    async def fetch(self, path):
        await asyncio.sleep(self.delays.get(path, 0.0))
        self.completed.append(path)
        return await super().fetch(path)


class FailingStore(InMemoryDocumentStore):
    async def fetch(self, path):
        if path.endswith("broken.txt"):
            raise OSError("storage backend unavailable")
        return await super().fetch(path)


@pytest.mark.asyncio
async def test_corpus_follows_request_order_not_completion_order(offline_config):
    docs = {
        "uploads/u1/first.txt": b"first",
        "uploads/u1/second.txt": b"second",
        "uploads/u1/third.txt": b"third",
    }
    store = SlowStore(
        docs,
        delays={
            "uploads/u1/first.txt": 0.05,
            "uploads/u1/second.txt": 0.0,
            "uploads/u1/third.txt": 0.02,
        },
    )
    request = ParseRequest(user_id="u1", file_paths=list(docs))

    result = await create_executor(offline_config).execute(request, store)

    assert store.completed[0] == "uploads/u1/second.txt"
    assert segment_boundaries(result.corpus) == list(docs)
    assert [s.path for s in result.segments] == list(docs)


@pytest.mark.asyncio
async def test_corrupted_document_does_not_stop_the_request(offline_config):
    store = InMemoryDocumentStore(
        {
            "uploads/u1/a.txt": b"Jane Doe\njane@example.com\n",
            "uploads/u1/b.docx": b"this is not a zip archive",
        }
    )

    result = await create_executor(offline_config).execute(
        ParseRequest(user_id="u1"), store
    )

    assert result.attempt.states[-1] is ExtractionState.DONE
    assert result.failed_paths == ("uploads/u1/b.docx",)
    assert "[ERROR: Failed to extract DOCX content from uploads/u1/b.docx]" in (
        result.corpus
    )
    assert result.contact.emails == ("jane@example.com",)
    assert result.contact.full_name == "Jane Doe"


@pytest.mark.asyncio
async def test_fetch_failure_becomes_failed_segment(offline_config):
    store = FailingStore(
        {"uploads/u1/ok.txt": b"a@x.com", "uploads/u1/broken.txt": b""}
    )
    request = ParseRequest(
        user_id="u1", file_paths=["uploads/u1/broken.txt", "uploads/u1/ok.txt"]
    )

    result = await create_executor(offline_config).execute(request, store)

    broken, ok = result.segments
    assert broken.status is SegmentStatus.EXTRACTION_FAILED
    assert "storage backend unavailable" in broken.error_detail
    assert ok.is_ok
    assert result.contact.emails == ("a@x.com",)


@pytest.mark.asyncio
async def test_missing_explicit_path_is_isolated(offline_config):
    store = InMemoryDocumentStore({"uploads/u1/a.txt": b"a@x.com"})
    request = ParseRequest(
        user_id="u1", file_paths=["uploads/u1/a.txt", "uploads/u1/gone.pdf"]
    )

    result = await create_executor(offline_config).execute(request, store)

    assert result.failed_paths == ("uploads/u1/gone.pdf",)
    assert "[ERROR: Failed to extract PDF content from uploads/u1/gone.pdf]" in (
        result.corpus
    )


@pytest.mark.asyncio
async def test_empty_prefix_raises_not_found(offline_config):
    store = InMemoryDocumentStore({"uploads/someone-else/a.txt": b"x"})

    with pytest.raises(ResourceNotFoundError) as exc_info:
        await create_executor(offline_config).execute(ParseRequest(user_id="u1"), store)

    assert exc_info.value.code == "not-found"


@pytest.mark.asyncio
async def test_empty_explicit_list_raises_not_found(offline_config):
    request = ParseRequest(user_id="u1", file_paths=[])

    with pytest.raises(ResourceNotFoundError):
        await create_executor(offline_config).execute(request, InMemoryDocumentStore())


@pytest.mark.asyncio
async def test_execute_documents(offline_config):
    docx_bytes = build_docx(["Jane Doe", "Phone: 555-123-4567"])

    result = await create_executor(offline_config).execute_documents(
        [("resume.docx", docx_bytes), ("notes.txt", b"jane@example.com")]
    )

    assert result.attempt.tier is Tier.FALLBACK
    assert result.to_payload() == {
        "contactInformation": {
            "fullName": "Jane Doe",
            "email": ["jane@example.com"],
            "phones": ["555-123-4567"],
        }
    }


@pytest.mark.asyncio
async def test_execute_documents_rejects_empty_input(offline_config):
    with pytest.raises(ResourceNotFoundError):
        await create_executor(offline_config).execute_documents([])


@pytest.mark.asyncio
async def test_concurrency_is_bounded():
    config = FrozenConfig(max_concurrency=2)
    active = 0
    peak = 0

    class CountingStore(InMemoryDocumentStore):
        async def fetch(self, path):
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return await super().fetch(path)

    store = CountingStore({f"uploads/u1/{i}.txt": b"x" for i in range(6)})

    await create_executor(config).execute(ParseRequest(user_id="u1"), store)

    assert peak == 2


@pytest.mark.asyncio
async def test_primary_tier_used_with_adapter(keyed_config, fake_adapter):
    reply = '{"contactInformation": {"fullName": "Jane Doe", "email": [], "phones": []}}'
    adapter = fake_adapter(reply)

    result = await create_executor(keyed_config, adapter=adapter).execute_documents(
        [("a.txt", b"resume body")]
    )

    assert result.attempt.tier is Tier.PRIMARY
    assert "--- DOCUMENT START: a.txt ---" in adapter.calls[0]["prompt"]


@pytest.mark.asyncio
async def test_store_listing_failure_raises_not_found(offline_config):
    class UnlistableStore(InMemoryDocumentStore):
        async def list_paths(self, prefix):
            raise FileNotFoundError(f"{prefix} is outside the store root")

    with pytest.raises(ResourceNotFoundError) as exc_info:
        await create_executor(offline_config).execute(
            ParseRequest(user_id="u1"), UnlistableStore()
        )

    assert exc_info.value.code == "not-found"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["", "   "])
async def test_execute_documents_rejects_blank_paths(offline_config, path):
    with pytest.raises(InputError) as exc_info:
        await create_executor(offline_config).execute_documents(
            [("a.txt", b"a@x.com"), (path, b"b@x.com")]
        )

    assert exc_info.value.code == "invalid-argument"
