import base64
import hashlib
import re
import time
from collections.abc import Mapping, Sequence

from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from openpayments_sdk.keys import load_signing_key

SIGNATURE_LABEL = "sig1"

_KEYID_RE = re.compile(r';\s*keyid="([^"]*)"')
_SIG_INPUT_RE = re.compile(r"^\s*(?P<label>[A-Za-z][A-Za-z0-9_-]*)=\((?P<components>[^)]*)\)(?P<params>.*)$")
_SIG_RE = re.compile(r"^\s*(?P<label>[A-Za-z][A-Za-z0-9_-]*)=:(?P<sig>[A-Za-z0-9+/=]+):\s*$")
_COMPONENT_RE = re.compile(r'"([^"]+)"')


def _b64_encode(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def content_digest(body: bytes) -> str:
    return f"sha-512=:{_b64_encode(hashlib.sha512(body).digest())}:"


def signature_params(components: Sequence[str], *, key_id: str, created: int) -> str:
    components_str = " ".join(f'"{component}"' for component in components)
    return f'({components_str});keyid="{key_id}";created={created}'


def build_signature_base(
    components: Sequence[str],
    values: Mapping[str, str],
    params: str,
) -> str:
    lines = [f'"{component}": {values[component]}' for component in components]
    lines.append(f'"@signature-params": {params}')
    return "\n".join(lines)


def _covered_values(method: str, url: str, headers: Mapping[str, str]) -> dict[str, str]:
    values = {key.lower(): value for key, value in headers.items()}
    values["@method"] = method.upper()
    values["@target-uri"] = url
    return values


def create_signature_headers(
    *,
    method: str,
    url: str,
    headers: Mapping[str, str],
    body: bytes | None,
    private_key: bytes | SigningKey,
    key_id: str,
    created: int | None = None,
) -> dict[str, str]:
    signing_key = (
        private_key if isinstance(private_key, SigningKey) else load_signing_key(private_key)
    )
    lowered = {key.lower(): value for key, value in headers.items()}

    result: dict[str, str] = {}
    components = ["@method", "@target-uri"]
    if "authorization" in lowered:
        components.append("authorization")
    if body:
        result["Content-Digest"] = content_digest(body)
        result["Content-Length"] = str(len(body))
        result["Content-Type"] = lowered.get("content-type", "application/json")
        components.extend(["content-digest", "content-length", "content-type"])

    params = signature_params(
        components,
        key_id=key_id,
        created=created if created is not None else int(time.time()),
    )
    base = build_signature_base(components, _covered_values(method, url, {**lowered, **result}), params)
    signature = signing_key.sign(base.encode("utf-8")).signature

    result["Signature"] = f"{SIGNATURE_LABEL}=:{_b64_encode(signature)}:"
    result["Signature-Input"] = f"{SIGNATURE_LABEL}={params}"
    return result


def key_ids(signature_input: str) -> list[str]:
    return _KEYID_RE.findall(signature_input or "")


def get_key_id(signature_input: str) -> str | None:
    found = key_ids(signature_input)
    return found[0] if found else None


def ensure_key_id(signature_input: str, key_id: str) -> str:
    """Return ``signature_input`` carrying ``key_id`` as its only keyid parameter."""
    if key_ids(signature_input) == [key_id]:
        return signature_input
    stripped = _KEYID_RE.sub("", signature_input)
    return f'{stripped};keyid="{key_id}"'


def verify_signature_headers(
    *,
    method: str,
    url: str,
    headers: Mapping[str, str],
    body: bytes | None,
    public_key: bytes | VerifyKey,
) -> bool:
    lowered = {key.lower(): value for key, value in headers.items()}
    input_match = _SIG_INPUT_RE.match(lowered.get("signature-input", ""))
    signature_match = _SIG_RE.match(lowered.get("signature", ""))
    if input_match is None or signature_match is None:
        return False
    if input_match.group("label") != signature_match.group("label"):
        return False

    components = _COMPONENT_RE.findall(input_match.group("components"))
    if body and lowered.get("content-digest") != content_digest(body):
        return False

    values = _covered_values(method, url, lowered)
    if any(component not in values for component in components):
        return False

    params = f"({input_match.group('components')}){input_match.group('params')}"
    base = build_signature_base(components, values, params)
    verify_key = public_key if isinstance(public_key, VerifyKey) else VerifyKey(public_key)
    try:
        verify_key.verify(base.encode("utf-8"), base64.b64decode(signature_match.group("sig")))
        return True
    except (BadSignatureError, ValueError):
        return False
