"""Interface of the registry-backed image architecture inspector."""

from __future__ import annotations

import threading
from typing import Protocol

ARCHITECTURE_AMD64 = "amd64"
ARCHITECTURE_ARM64 = "arm64"
ARCHITECTURE_PPC64LE = "ppc64le"
ARCHITECTURE_S390X = "s390x"


class ImageInspectionError(RuntimeError):
    """The image could not be resolved (not found, auth failure, network error)."""


class ArchitectureInspector(Protocol):
    def get_compatible_architectures_set(
        self,
        image_reference: str,
        pull_secrets: list[bytes],
        cancel: threading.Event | None = None,
    ) -> frozenset[str]:
        """Return the architectures every manifest of ``image_reference`` supports."""
        ...
