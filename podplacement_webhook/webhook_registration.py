"""MutatingWebhookConfiguration that routes pod creation to the scheduling-gate webhook."""

from __future__ import annotations

from kubernetes.client import models as k8s

from podplacement_webhook.constants import (
    WEBHOOK_CONFIGURATION_NAME,
    WEBHOOK_NAME,
    WEBHOOK_PATH,
    WEBHOOK_TIMEOUT_SECONDS,
)
from podplacement_webhook.webhook_config import WebhookConfig


def build_mutating_webhook_configuration(
    config: WebhookConfig,
    service_name: str,
    service_namespace: str,
    ca_bundle: str | None = None,
) -> k8s.V1MutatingWebhookConfiguration:
    """Return the registration for pod CREATE calls on the core v1 API group.

    Failures are ignored by the API server so a broken webhook admits pods
    ungated instead of blocking them.
    """
    if not service_name or not service_name.strip():
        raise ValueError("service_name must be a non-empty string")
    if not service_namespace or not service_namespace.strip():
        raise ValueError("service_namespace must be a non-empty string")

    client_config = k8s.AdmissionregistrationV1WebhookClientConfig(
        service=k8s.AdmissionregistrationV1ServiceReference(
            name=service_name.strip(),
            namespace=service_namespace.strip(),
            path=WEBHOOK_PATH,
            port=config.port,
        ),
        ca_bundle=ca_bundle,
    )
    return k8s.V1MutatingWebhookConfiguration(
        api_version="admissionregistration.k8s.io/v1",
        kind="MutatingWebhookConfiguration",
        metadata=k8s.V1ObjectMeta(name=WEBHOOK_CONFIGURATION_NAME),
        webhooks=[
            k8s.V1MutatingWebhook(
                name=WEBHOOK_NAME,
                admission_review_versions=["v1"],
                client_config=client_config,
                failure_policy="Ignore",
                side_effects="None",
                timeout_seconds=WEBHOOK_TIMEOUT_SECONDS,
                rules=[
                    k8s.V1RuleWithOperations(
                        api_groups=[""],
                        api_versions=["v1"],
                        operations=["CREATE"],
                        resources=["pods"],
                    )
                ],
            )
        ],
    )
