"""Mutating admission handler that gates new pods for architecture resolution."""

from __future__ import annotations

import logging
import threading
from http import HTTPStatus

from podplacement_webhook.admission import AdmissionRequest, AdmissionResponse
from podplacement_webhook.patch_builder import patched_pod_response
from podplacement_webhook.pod_codec import PodCodec, PodDecodeError
from podplacement_webhook.scheduling_gate_mutation import scheduling_gate_mutation_hook
from podplacement_webhook.webhook_config import WebhookConfig

logger = logging.getLogger(__name__)


class PodSchedulingGateMutatingWebhook:
    """Decode the pod, gate it unless exempt, and answer with a JSON Patch."""

    def __init__(self, config: WebhookConfig, codec: PodCodec | None = None):
        self.config = config
        self._codec = codec or PodCodec()

    def handle(self, request: AdmissionRequest, cancel: threading.Event | None = None) -> AdmissionResponse:
        # ``cancel`` belongs to the caller's request; no step below blocks, so it is never waited on.
        try:
            pod = self._codec.decode(request.raw)
        except PodDecodeError as exc:
            logger.warning("Rejecting admission request %s: %s", request.uid or "<unknown>", exc)
            return AdmissionResponse.errored(HTTPStatus.BAD_REQUEST, exc)

        mutated = scheduling_gate_mutation_hook(pod, self.config, namespace=request.namespace)
        return patched_pod_response(request.raw, pod, mutated, self._codec)
