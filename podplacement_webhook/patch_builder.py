"""Turn a mutated pod into a JSON Patch admission response."""

from __future__ import annotations

import json
import logging
from http import HTTPStatus

import jsonpatch
from kubernetes.client import models as k8s

from podplacement_webhook.admission import AdmissionResponse
from podplacement_webhook.pod_codec import PodCodec, PodEncodeError

logger = logging.getLogger(__name__)


def patch_response_from_raw(original: bytes, current: bytes) -> AdmissionResponse:
    """Diff two JSON documents into an RFC 6902 patch response."""
    try:
        patch = jsonpatch.make_patch(json.loads(original), json.loads(current))
    except ValueError as exc:
        logger.error("Couldn't compute pod patch: %s", exc)
        return AdmissionResponse.errored(HTTPStatus.INTERNAL_SERVER_ERROR, exc)
    return AdmissionResponse.patch_response(patch.patch)


def patched_pod_response(
    original: bytes,
    pod: k8s.V1Pod,
    mutated: k8s.V1Pod,
    codec: PodCodec,
) -> AdmissionResponse:
    """Patch ``original`` with exactly what changed between ``pod`` and ``mutated``.

    Both pods go through the same encoder, so fields it drops or rewrites
    (nulls, timestamps, fields unknown to the client model) cancel out and
    the raw object keeps them.
    """
    if mutated is pod:
        return AdmissionResponse.patch_response([])
    try:
        decoded_pod = codec.encode(pod)
        marshaled_pod = codec.encode(mutated)
    except PodEncodeError as exc:
        logger.error("Couldn't serialize mutated pod: %s", exc)
        return AdmissionResponse.errored(HTTPStatus.INTERNAL_SERVER_ERROR, exc)

    changes = jsonpatch.make_patch(json.loads(decoded_pod), json.loads(marshaled_pod))
    try:
        current = changes.apply(json.loads(original))
    except (ValueError, jsonpatch.JsonPatchException, jsonpatch.JsonPointerException) as exc:
        logger.error("Couldn't apply pod changes to the request object: %s", exc)
        return AdmissionResponse.errored(HTTPStatus.INTERNAL_SERVER_ERROR, exc)
    return patch_response_from_raw(original, json.dumps(current).encode("utf-8"))
