"""Namespace exemption policy for the scheduling-gate webhook."""

from __future__ import annotations

from podplacement_webhook.webhook_config import WebhookConfig


def is_exempt_namespace(namespace: str | None, config: WebhookConfig) -> bool:
    """Return True for the operator namespace and infrastructure namespaces.

    Control-plane pods in these namespaces must never wait on architecture
    resolution, or cluster bootstrap could deadlock.
    """
    normalized = (namespace or "").strip()
    if normalized == config.operator_namespace:
        return True
    return any(normalized.startswith(prefix) for prefix in config.exempt_namespace_prefixes)
