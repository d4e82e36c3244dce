"""Unit tests for the redis blacklist, email rendering and the HTTP responder."""

import hashlib
import importlib
import json
import warnings
from enum import Enum
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from authhub.api.responder import ChannelResponder
from authhub.modules.user_management.domain.services.email import EmailMessage
from authhub.shared.core.exceptions import CacheError, EmailDeliveryError, OperationError
from authhub.shared.core.operation import Operation, OperationOutcome
from authhub.shared.infrastructure.cache.token_blacklist import RedisTokenBlackList
from authhub.shared.infrastructure.email.email_service import LoggingEmailService, render
from authhub.shared.utils.logging import log_context


class TestRedisTokenBlackList:
    def setup_method(self):
        self.client = AsyncMock()
        self.blacklist = RedisTokenBlackList(self.client, prefix="bl:")

    async def test_add_stores_digest_with_ttl(self):
        await self.blacklist.add("raw.jwt.value", 120)

        digest = hashlib.sha256(b"raw.jwt.value").hexdigest()
        self.client.set.assert_awaited_once_with(f"bl:{digest}", "1", ex=120)

    async def test_add_never_uses_zero_ttl(self):
        await self.blacklist.add("raw.jwt.value", 0)

        assert self.client.set.call_args.kwargs["ex"] == 1

    async def test_contains(self):
        self.client.exists.return_value = 1

        assert await self.blacklist.contains("raw.jwt.value")

    async def test_redis_failure_becomes_cache_error(self):
        self.client.set.side_effect = RedisConnectionError("down")

        with pytest.raises(CacheError):
            await self.blacklist.add("raw.jwt.value", 60)


class TestEmailRendering:
    def test_verification_template(self):
        message = EmailMessage(
            to="jane@example.com",
            subject="Validate",
            template="email-verification-token",
            context={
                "name": "Jane",
                "verification_url": "http://x/auth/verify-email?token=abc",
                "expires_in_minutes": 10,
                "current_year": 2026,
            },
        )

        text, html = render(message)

        assert "http://x/auth/verify-email?token=abc" in text
        assert "10 minutes" in text
        assert 'href="http://x/auth/verify-email?token=abc"' in html

    def test_unknown_template(self):
        with pytest.raises(EmailDeliveryError):
            render(EmailMessage(to="a@b.c", subject="s", template="nope"))

    def test_missing_variable(self):
        with pytest.raises(EmailDeliveryError):
            render(EmailMessage(to="a@b.c", subject="s", template="reset-password", context={"name": "x"}))

    def test_prerendered_body_wins(self):
        assert render(EmailMessage(to="a@b.c", subject="s", text="plain")) == ("plain", None)

    async def test_logging_service_is_always_available(self):
        service = LoggingEmailService()

        assert await service.verify()
        await service.send(EmailMessage(to="a@b.c", subject="s", text="plain"))


class Lookup(Operation):
    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        MISSING = "MISSING"


class TestChannelResponder:
    def test_every_declared_channel_needs_a_status(self):
        with pytest.raises(ValueError, match="MISSING"):
            ChannelResponder(Lookup, {"SUCCESS": 200})

    def test_unknown_channel_is_rejected(self):
        with pytest.raises(ValueError, match="TIMEOUT"):
            ChannelResponder(Lookup, {"SUCCESS": 200, "MISSING": 404, "TIMEOUT": 504})

    def test_error_defaults_to_500(self):
        responder = ChannelResponder(Lookup, {"SUCCESS": 200, "MISSING": 404})

        assert responder.status_for("ERROR") == 500

    def test_validation_error_defaults_to_422(self):
        class Checked(Operation):
            class Output(str, Enum):
                SUCCESS = "SUCCESS"
                ERROR = "ERROR"
                VALIDATION_ERROR = "VALIDATION_ERROR"

        assert ChannelResponder(Checked, {"SUCCESS": 200}).status_for("VALIDATION_ERROR") == 422

    def test_module_import_raises_no_deprecation_warning(self):
        import authhub.api.responder as responder_module

        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            importlib.reload(responder_module)

    def test_success_payload_is_rendered_as_is(self):
        responder = ChannelResponder(Lookup, {"SUCCESS": 200, "MISSING": 404})

        response = responder.respond(OperationOutcome("SUCCESS", {"id": 1}))

        assert response.status_code == 200
        assert json.loads(response.body) == {"id": 1}

    def test_string_payload_becomes_error_envelope(self):
        responder = ChannelResponder(Lookup, {"SUCCESS": 200, "MISSING": 404})

        with log_context(request_id="req-1"):
            body = responder.body(OperationOutcome("MISSING", "nothing here"))

        assert body == {"error": {"code": "MISSING", "message": "nothing here", "request_id": "req-1"}}

    def test_operation_error_exposes_code_not_cause(self):
        responder = ChannelResponder(Lookup, {"SUCCESS": 200, "MISSING": 404})

        body = responder.body(OperationOutcome("ERROR", OperationError("LOOKUP_FAILED", "failed", KeyError("x"))))

        assert body["error"]["code"] == "LOOKUP_FAILED"
        assert body["error"]["message"] == "failed"
        assert "details" not in body["error"]

    def test_mapping_payload_keeps_details(self):
        responder = ChannelResponder(Lookup, {"SUCCESS": 200, "MISSING": 404})

        body = responder.body(OperationOutcome("MISSING", {"message": "gone", "id": "x"}))

        assert body["error"]["details"] == {"id": "x"}

    def test_responses_document_each_status(self):
        responder = ChannelResponder(Lookup, {"SUCCESS": 200, "MISSING": 404})

        docs = responder.responses()

        assert docs[404]["description"] == "MISSING"
        assert docs[500]["description"] == "ERROR"
