"""Environment-driven configuration for the scheduling-gate webhook."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from podplacement_webhook.constants import (
    DEFAULT_BIND_ADDRESS,
    DEFAULT_CERT_DIR,
    DEFAULT_OPERATOR_NAMESPACE,
    DEFAULT_WEBHOOK_PORT,
    EXEMPT_NAMESPACE_PREFIXES,
    SCHEDULING_GATE_NAME,
    SERVICE_ACCOUNT_NAMESPACE_FILE,
)


def _service_account_namespace(path: str) -> str | None:
    try:
        with open(path, encoding="utf-8") as handle:
            namespace = handle.read().strip()
    except OSError:
        return None
    return namespace or None


def _split_prefixes(value: str) -> tuple[str, ...]:
    return tuple(dict.fromkeys(prefix.strip() for prefix in value.split(",") if prefix.strip()))


def _parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise ValueError(f"WEBHOOK_PORT must be an integer, got {value!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"WEBHOOK_PORT must be between 1 and 65535, got {port}")
    return port


@dataclass(frozen=True)
class WebhookConfig:
    """Immutable settings shared read-only by every admission call."""

    operator_namespace: str = DEFAULT_OPERATOR_NAMESPACE
    scheduling_gate_name: str = SCHEDULING_GATE_NAME
    exempt_namespace_prefixes: tuple[str, ...] = EXEMPT_NAMESPACE_PREFIXES
    bind_address: str = DEFAULT_BIND_ADDRESS
    port: int = DEFAULT_WEBHOOK_PORT
    cert_dir: str = DEFAULT_CERT_DIR
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.scheduling_gate_name or not self.scheduling_gate_name.strip():
            raise ValueError("scheduling_gate_name must be a non-empty string")

    @property
    def tls_cert_file(self) -> str:
        return os.path.join(self.cert_dir, "tls.crt")

    @property
    def tls_key_file(self) -> str:
        return os.path.join(self.cert_dir, "tls.key")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        namespace_file: str = SERVICE_ACCOUNT_NAMESPACE_FILE,
    ) -> WebhookConfig:
        """Build the config from environment variables, falling back to defaults.

        The operator namespace comes from ``NAMESPACE``, then from the mounted
        service-account namespace file, then from the built-in default.
        """
        env = os.environ if environ is None else environ

        operator_namespace = (env.get("NAMESPACE") or "").strip()
        if not operator_namespace:
            operator_namespace = _service_account_namespace(namespace_file) or DEFAULT_OPERATOR_NAMESPACE

        prefixes = EXEMPT_NAMESPACE_PREFIXES
        raw_prefixes = env.get("EXEMPT_NAMESPACE_PREFIXES")
        if raw_prefixes is not None:
            prefixes = _split_prefixes(raw_prefixes)

        return cls(
            operator_namespace=operator_namespace,
            scheduling_gate_name=env.get("SCHEDULING_GATE_NAME", SCHEDULING_GATE_NAME).strip(),
            exempt_namespace_prefixes=prefixes,
            bind_address=env.get("WEBHOOK_BIND_ADDRESS", DEFAULT_BIND_ADDRESS).strip(),
            port=_parse_port(env.get("WEBHOOK_PORT", str(DEFAULT_WEBHOOK_PORT))),
            cert_dir=env.get("WEBHOOK_CERT_DIR", DEFAULT_CERT_DIR),
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )
