"""Add the architecture scheduling gate and bookkeeping labels to new pods."""

from __future__ import annotations

import copy
import logging

from kubernetes.client import models as k8s

from podplacement_webhook.constants import (
    NODE_AFFINITY_LABEL,
    NODE_AFFINITY_LABEL_VALUE_UNSET,
    SCHEDULING_GATE_LABEL,
    SCHEDULING_GATE_LABEL_VALUE_GATED,
)
from podplacement_webhook.namespace_policy import is_exempt_namespace
from podplacement_webhook.webhook_config import WebhookConfig

logger = logging.getLogger(__name__)


def has_scheduling_gate(pod: k8s.V1Pod, gate_name: str) -> bool:
    if pod.spec is None:
        return False
    return any(gate.name == gate_name for gate in pod.spec.scheduling_gates or [])


def scheduling_gate_mutation_hook(
    pod: k8s.V1Pod,
    config: WebhookConfig,
    namespace: str | None = None,
) -> k8s.V1Pod:
    """Return the pod gated for architecture resolution, or the same pod untouched.

    ``namespace`` is only used when the pod itself carries none. Pods already
    holding the gate are returned as-is, without re-applying the labels, so
    repeated admission of the same pod is a no-op.
    """
    if pod is None or pod.spec is None:
        return pod

    pod_namespace = (pod.metadata.namespace if pod.metadata else None) or namespace
    if is_exempt_namespace(pod_namespace, config):
        logger.debug("Namespace %r is exempt, pod left ungated", pod_namespace)
        return pod

    if has_scheduling_gate(pod, config.scheduling_gate_name):
        logger.debug("Pod in %r already carries gate %s", pod_namespace, config.scheduling_gate_name)
        return pod

    gated = copy.deepcopy(pod)
    if gated.spec.scheduling_gates is None:
        gated.spec.scheduling_gates = []
    gated.spec.scheduling_gates.append(k8s.V1PodSchedulingGate(name=config.scheduling_gate_name))

    # The scheduler mishandles gated pods without an affinity object (kubernetes/kubernetes#118052).
    if gated.spec.affinity is None:
        gated.spec.affinity = k8s.V1Affinity()

    if gated.metadata is None:
        gated.metadata = k8s.V1ObjectMeta()
    if gated.metadata.labels is None:
        gated.metadata.labels = {}
    gated.metadata.labels[SCHEDULING_GATE_LABEL] = SCHEDULING_GATE_LABEL_VALUE_GATED
    gated.metadata.labels[NODE_AFFINITY_LABEL] = NODE_AFFINITY_LABEL_VALUE_UNSET

    logger.debug("Added scheduling gate to pod %r in %r", gated.metadata.name, pod_namespace)
    return gated
