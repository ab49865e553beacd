"""JSON codec between admission request bytes and typed Kubernetes pods."""

from __future__ import annotations

import inspect
import json
from typing import Any

from kubernetes.client import ApiClient, ApiException
from kubernetes.client import models as k8s


class PodDecodeError(ValueError):
    """Raised when raw admission bytes are not a valid v1 Pod."""


class PodEncodeError(ValueError):
    """Raised when a pod cannot be serialized back to JSON."""


class PodCodec:
    """Decode and encode pods with a Kubernetes ``ApiClient``.

    The client is created when the codec is constructed and only read
    afterwards, so one codec can serve concurrent admission calls.
    """

    def __init__(self, api_client: ApiClient | None = None):
        self._api_client = api_client or ApiClient()
        # Clients before 33.1 expect a response object here; refuse them at setup rather than per call.
        inspect.signature(self._api_client.deserialize).bind("{}", "V1Pod", "application/json")

    def decode(self, raw: bytes) -> k8s.V1Pod:
        if not raw:
            raise PodDecodeError("there is no content to decode")
        try:
            document: Any = json.loads(raw)
        except ValueError as exc:
            raise PodDecodeError(f"couldn't parse pod JSON: {exc}") from exc
        if not isinstance(document, dict):
            raise PodDecodeError(f"expected a JSON object, got {type(document).__name__}")

        kind = document.get("kind")
        api_version = document.get("apiVersion")
        if kind != "Pod" or api_version != "v1":
            raise PodDecodeError(f"expected v1/Pod, got {api_version or '<missing>'}/{kind or '<missing>'}")

        try:
            return self._api_client.deserialize(raw.decode("utf-8"), "V1Pod", "application/json")
        except (ApiException, TypeError, ValueError, AttributeError) as exc:
            raise PodDecodeError(f"invalid pod: {exc}") from exc

    def encode(self, pod: k8s.V1Pod) -> bytes:
        try:
            document = self._api_client.sanitize_for_serialization(pod)
            return json.dumps(document, separators=(",", ":"), allow_nan=False).encode("utf-8")
        except (TypeError, ValueError, AttributeError) as exc:
            raise PodEncodeError(f"couldn't serialize pod: {exc}") from exc
