import json
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from openpayments_sdk.canonical import serialize_body
from openpayments_sdk.errors import (
    HttpRequestError,
    SigningConfigMissingError,
    TransportError,
)
from openpayments_sdk.keys import KeyStore
from openpayments_sdk.signatures import create_signature_headers, ensure_key_id
from openpayments_sdk.types import HttpRequestSpec, SigningConfig

Signer = Callable[..., Mapping[str, str]]


def should_sign(method: str, access_token: str | None, sign: bool | None) -> bool:
    if sign is not None:
        return sign
    if access_token:
        return True
    return method.upper() != "GET"


def parse_response_body(text: str) -> Any:
    """Empty body -> None, JSON when it parses, the raw text otherwise."""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


class AsyncOpenPaymentsClient:
    def __init__(
        self,
        key_store: KeyStore | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        signer: Signer = create_signature_headers,
    ) -> None:
        self._key_store = key_store or KeyStore()
        self._timeout = timeout
        self._transport = transport
        self._signer = signer

    @property
    def key_store(self) -> KeyStore:
        return self._key_store

    def _sign(
        self,
        method: str,
        url: httpx.URL,
        headers: httpx.Headers,
        body: bytes | None,
        signing_config: SigningConfig | None,
    ) -> None:
        if signing_config is None:
            raise SigningConfigMissingError()

        private_key = self._key_store.load(signing_config.private_key_path)
        signature_headers = self._signer(
            method=method,
            url=str(url),
            headers=dict(headers),
            body=body,
            private_key=private_key,
            key_id=signing_config.key_id,
        )
        headers.update(signature_headers)

        signature_input = headers.get("Signature-Input")
        if signing_config.key_id and signature_input is not None:
            headers["Signature-Input"] = ensure_key_id(signature_input, signing_config.key_id)

    async def send(
        self,
        request: HttpRequestSpec,
        signing_config: SigningConfig | None = None,
        *,
        sign: bool | None = None,
    ) -> Any:
        method = request.method.upper()
        url = httpx.URL(request.url)
        if request.params:
            url = url.copy_merge_params(request.params)

        headers = httpx.Headers({"Accept": "application/json", **request.headers})
        if request.access_token:
            headers["Authorization"] = f"GNAP {request.access_token}"

        body = serialize_body(request.body)

        if should_sign(method, request.access_token, sign):
            self._sign(method, url, headers, body, signing_config)
        elif body is not None and "Content-Type" not in headers:
            headers["Content-Type"] = "application/json"

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(method, url, headers=headers, content=body)
        except httpx.TimeoutException as exc:
            raise TransportError(
                method=method, url=request.url, reason=str(exc) or "timeout", is_timeout=True
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(method=method, url=request.url, reason=str(exc)) from exc

        parsed_body = parse_response_body(response.text)
        if not response.is_success:
            raise HttpRequestError(
                method=method,
                url=request.url,
                status=response.status_code,
                body=parsed_body,
            )
        return parsed_body

    async def get(
        self,
        url: str,
        *,
        access_token: str | None = None,
        signing_config: SigningConfig | None = None,
        sign: bool | None = False,
        params: dict[str, str] | None = None,
    ) -> Any:
        request = HttpRequestSpec(method="GET", url=url, access_token=access_token, params=params)
        return await self.send(request, signing_config, sign=sign)

    async def post(
        self,
        url: str,
        body: Any = None,
        *,
        access_token: str | None = None,
        signing_config: SigningConfig | None = None,
        sign: bool | None = None,
    ) -> Any:
        request = HttpRequestSpec(method="POST", url=url, body=body, access_token=access_token)
        return await self.send(request, signing_config, sign=sign)

    async def delete(
        self,
        url: str,
        *,
        access_token: str | None = None,
        signing_config: SigningConfig | None = None,
        sign: bool | None = None,
    ) -> Any:
        request = HttpRequestSpec(method="DELETE", url=url, access_token=access_token)
        return await self.send(request, signing_config, sign=sign)
