"""Tests for activity webhook signing, delivery and the webhook-backed notifier."""

import hashlib
import hmac
import json

import httpx
import pytest

from signoff.events.activity import (
    ACTIVITY_CREATED,
    ACTIVITY_STATUS_CHANGED,
    WebhookActivityNotifier,
    notify_safely,
)
from signoff.events.webhook_config import WebhookRegistry, WebhookSubscription
from signoff.events.webhook_emitter import WebhookEmitter, build_envelope, sign_payload


def _recording_transport(status_codes):
    """MockTransport answering with the given status codes in order."""
    requests = []
    codes = iter(status_codes)

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(next(codes))

    return httpx.MockTransport(handler), requests


def test_build_envelope():
    envelope = build_envelope(ACTIVITY_CREATED, {"entity_id": "appr_1"})
    assert envelope.event_type == "activity.created"
    assert envelope.source_system == "signoff-api"
    assert envelope.schema_version == "1.0"
    assert envelope.event_id.startswith("evt_")
    assert envelope.signature is None


def test_sign_payload():
    body = b'{"test":"data"}'
    expected = hmac.new(b"my-secret", body, hashlib.sha256).hexdigest()
    assert sign_payload(body, "my-secret") == expected


def test_registry_filters_by_event_type():
    registry = WebhookRegistry([
        WebhookSubscription(url="http://a.test/hook", secret="s1"),
        WebhookSubscription(url="http://b.test/hook", secret="s2", event_types=[ACTIVITY_STATUS_CHANGED]),
        WebhookSubscription(url="http://c.test/hook", secret="s3", active=False),
    ])

    assert len(registry.get_subscribers(ACTIVITY_STATUS_CHANGED)) == 2
    assert [s.url for s in registry.get_subscribers(ACTIVITY_CREATED)] == ["http://a.test/hook"]


def test_registry_from_urls():
    registry = WebhookRegistry.from_urls(["http://a.test/hook", "http://b.test/hook"], "shared")
    assert [s.url for s in registry.list_all()] == ["http://a.test/hook", "http://b.test/hook"]
    assert all(s.secret == "shared" for s in registry.list_all())


@pytest.mark.asyncio
async def test_emit_without_subscribers_sends_nothing():
    transport, requests = _recording_transport([200])
    emitter = WebhookEmitter(WebhookRegistry(), transport=transport)
    assert await emitter.emit(ACTIVITY_CREATED, {"entity_id": "appr_1"}) == []
    assert requests == []


@pytest.mark.asyncio
async def test_emit_signs_body():
    transport, requests = _recording_transport([200])
    registry = WebhookRegistry.from_urls(["http://a.test/hook"], "s3cret")
    results = await WebhookEmitter(registry, transport=transport).emit(ACTIVITY_CREATED, {"entity_id": "appr_1"})

    assert results == [{"url": "http://a.test/hook", "status": 200, "error": None}]
    request = requests[0]
    assert request.headers["X-Signoff-Event"] == "activity.created"

    body = json.loads(request.content)
    signature = body["signature"]
    assert signature == request.headers["X-Signoff-Signature"]
    unsigned = {**body, "signature": None}
    expected = sign_payload(json.dumps(unsigned, separators=(",", ":")).encode("utf-8"), "s3cret")
    assert signature == expected
    assert body["payload"] == {"entity_id": "appr_1"}


@pytest.mark.asyncio
async def test_emit_retries_server_errors():
    transport, requests = _recording_transport([503, 502, 200])
    registry = WebhookRegistry.from_urls(["http://a.test/hook"], "s")
    results = await WebhookEmitter(registry, transport=transport).emit(ACTIVITY_CREATED, {})

    assert len(requests) == 3
    assert results[0]["status"] == 200


@pytest.mark.asyncio
async def test_emit_does_not_retry_client_errors():
    transport, requests = _recording_transport([404])
    registry = WebhookRegistry.from_urls(["http://a.test/hook"], "s")
    results = await WebhookEmitter(registry, transport=transport).emit(ACTIVITY_CREATED, {})

    assert len(requests) == 1
    assert results[0]["error"] == "HTTP 404"


@pytest.mark.asyncio
async def test_emit_reports_connection_failure():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    registry = WebhookRegistry.from_urls(["http://a.test/hook"], "s")
    emitter = WebhookEmitter(registry, transport=httpx.MockTransport(handler), max_retries=2)
    results = await emitter.emit(ACTIVITY_CREATED, {})
    assert results[0]["status"] is None
    assert "refused" in results[0]["error"]


@pytest.mark.asyncio
async def test_webhook_notifier_forwards_status_change():
    transport, requests = _recording_transport([200])
    registry = WebhookRegistry.from_urls(["http://a.test/hook"], "s")
    notifier = WebhookActivityNotifier(WebhookEmitter(registry, transport=transport))

    await notifier.status_changed(
        "approval_request", "appr_1", "estimate approval", "pending", "approved", org_id="org_acme"
    )

    body = json.loads(requests[0].content)
    assert body["event_type"] == "activity.status_changed"
    assert body["payload"] == {
        "entity_kind": "approval_request",
        "entity_id": "appr_1",
        "label": "estimate approval",
        "from_status": "pending",
        "to_status": "approved",
        "org_id": "org_acme",
    }


@pytest.mark.asyncio
async def test_notify_safely_swallows_failures():
    async def _boom():
        raise RuntimeError("sink down")

    await notify_safely(_boom(), "created", "appr_1")
