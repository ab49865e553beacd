from __future__ import annotations

import json
from typing import Any

import pytest

from podplacement_webhook.admission import AdmissionRequest
from podplacement_webhook.pod_codec import PodCodec
from podplacement_webhook.webhook import PodSchedulingGateMutatingWebhook
from podplacement_webhook.webhook_config import WebhookConfig

OPERATOR_NAMESPACE = "openshift-multiarch-manager-operator"


def pod_document(
    namespace: str = "default",
    scheduling_gates: list[str] | None = None,
    labels: dict[str, str] | None = None,
    affinity: dict[str, Any] | None = None,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": "test-pod"}
    if namespace:
        metadata["namespace"] = namespace
    if labels is not None:
        metadata["labels"] = labels
    spec: dict[str, Any] = {
        "containers": [{"name": "app", "image": "my-registry.io/library/multi-arch-image:latest"}],
    }
    if scheduling_gates is not None:
        spec["schedulingGates"] = [{"name": name} for name in scheduling_gates]
    if affinity is not None:
        spec["affinity"] = affinity
    return {"apiVersion": "v1", "kind": "Pod", "metadata": metadata, "spec": spec}


def api_server_pod_document(
    namespace: str = "default",
    scheduling_gates: list[str] | None = None,
    labels: dict[str, str] | None = None,
) -> dict[str, Any]:
    """A pod shaped like the object the API server sends on CREATE."""
    document = pod_document(namespace=namespace, scheduling_gates=scheduling_gates, labels=labels)
    document["metadata"].update(
        {
            "generateName": "web-7d9f8c6b5-",
            "creationTimestamp": None,
            "managedFields": [
                {
                    "manager": "kube-controller-manager",
                    "operation": "Update",
                    "apiVersion": "v1",
                    "time": "2024-01-01T00:00:00Z",
                    "fieldsType": "FieldsV1",
                    "fieldsV1": {"f:metadata": {"f:generateName": {}}},
                }
            ],
        }
    )
    document["spec"]["containers"][0].update(
        {"resources": {}, "terminationMessagePath": "/dev/termination-log", "imagePullPolicy": "Always"}
    )
    document["spec"].update(
        {
            "restartPolicy": "Always",
            "priority": 0,
            "nodeName": None,
            "someFutureField": {"enabled": True},
        }
    )
    document["status"] = {}
    return document


def admission_request(document: dict[str, Any], namespace: str = "default") -> AdmissionRequest:
    return AdmissionRequest(
        uid="705ab4f5-6393-11e8-b7cc-42010a800002",
        namespace=namespace,
        operation="CREATE",
        raw=json.dumps(document).encode("utf-8"),
    )


@pytest.fixture
def config() -> WebhookConfig:
    return WebhookConfig(operator_namespace=OPERATOR_NAMESPACE)


@pytest.fixture
def codec() -> PodCodec:
    return PodCodec()


@pytest.fixture
def webhook(config: WebhookConfig, codec: PodCodec) -> PodSchedulingGateMutatingWebhook:
    return PodSchedulingGateMutatingWebhook(config, codec)
