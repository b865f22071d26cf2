"""
Unit tests for IdentityToolkitClient.
"""

import json

import httpx
import pytest

from service_identity.app.providers import IdentityToolkitClient, ProviderUserInfo, UserRecordError

BASE_URL = "http://mock-toolkit"


def make_client(handler, access_token="service-access-token"):
    return IdentityToolkitClient(
        BASE_URL,
        project_id="rephelper-test",
        access_token=access_token,
        transport=httpx.MockTransport(handler),
    )


class TestIdentityToolkitClient:
    """Test cases for IdentityToolkitClient."""

    @pytest.mark.asyncio
    async def test_lookup_request(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"users": [{"localId": "u1"}]})

        await make_client(handler).get_user_record("u1")

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/projects/rephelper-test/accounts:lookup"
        assert json.loads(request.content) == {"localId": ["u1"]}
        assert request.headers["Authorization"] == "Bearer service-access-token"

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_token(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"users": [{"localId": "u1"}]})

        await make_client(handler, access_token=None).get_user_record("u1")

        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_user_record_mapping(self):
        payload = {
            "localId": "u1",
            "email": "john.doe@rephelper.app",
            "displayName": "John Doe",
            "photoUrl": "https://cdn.rephelper.app/u1.png",
            "phoneNumber": "+5511999999999",
            "emailVerified": True,
            "providerUserInfo": [{"providerId": "google.com", "rawId": "1234", "email": "john.doe@gmail.com"}],
        }
        client = make_client(lambda request: httpx.Response(200, json={"users": [payload]}))

        record = await client.get_user_record("u1")

        assert record.uid == "u1"
        assert record.email == "john.doe@rephelper.app"
        assert record.display_name == "John Doe"
        assert record.photo_url == "https://cdn.rephelper.app/u1.png"
        assert record.phone_number == "+5511999999999"
        assert record.email_verified is True
        assert record.provider_data == [
            ProviderUserInfo(provider_id="google.com", uid="1234", email="john.doe@gmail.com")
        ]

    @pytest.mark.asyncio
    async def test_missing_provider_list_stays_none(self):
        client = make_client(lambda request: httpx.Response(200, json={"users": [{"localId": "u1"}]}))

        record = await client.get_user_record("u1")

        assert record.provider_data is None
        assert record.email_verified is None

    @pytest.mark.asyncio
    async def test_unknown_user(self):
        client = make_client(lambda request: httpx.Response(200, json={"kind": "identitytoolkit#GetAccountInfoResponse"}))

        with pytest.raises(UserRecordError) as exc_info:
            await client.get_user_record("ghost")

        assert exc_info.value.code == "user-not-found"
        assert "ghost" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_provider_error_status(self):
        client = make_client(
            lambda request: httpx.Response(400, json={"error": {"code": 400, "message": "INVALID_ID_TOKEN"}})
        )

        with pytest.raises(UserRecordError) as exc_info:
            await client.get_user_record("u1")

        assert exc_info.value.code == "400"
        assert "INVALID_ID_TOKEN" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_provider_error_without_json_body(self):
        client = make_client(lambda request: httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(UserRecordError) as exc_info:
            await client.get_user_record("u1")

        assert "502" in exc_info.value.message
