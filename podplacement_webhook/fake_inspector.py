"""In-memory architecture inspector for tests and local runs."""

from __future__ import annotations

import threading

from podplacement_webhook.image_inspector import (
    ARCHITECTURE_AMD64,
    ARCHITECTURE_ARM64,
    ARCHITECTURE_PPC64LE,
    ARCHITECTURE_S390X,
    ImageInspectionError,
)

SINGLE_ARCH_AMD64_IMAGE = "my-registry.io/library/single-arch-amd64-image:latest"
SINGLE_ARCH_ARM64_IMAGE = "my-registry.io/library/single-arch-arm64-image:latest"
MULTI_ARCH_IMAGE = "my-registry.io/library/multi-arch-image:latest"
MULTI_ARCH_IMAGE_2 = "my-registry.io/library/multi-arch-image2:latest"


def mock_images_architecture_map() -> dict[str, frozenset[str]]:
    """Image references mapped to the architectures they support."""
    return {
        SINGLE_ARCH_AMD64_IMAGE: frozenset({ARCHITECTURE_AMD64}),
        SINGLE_ARCH_ARM64_IMAGE: frozenset({ARCHITECTURE_ARM64}),
        MULTI_ARCH_IMAGE: frozenset({ARCHITECTURE_AMD64, ARCHITECTURE_ARM64}),
        MULTI_ARCH_IMAGE_2: frozenset(
            {ARCHITECTURE_AMD64, ARCHITECTURE_ARM64, ARCHITECTURE_PPC64LE, ARCHITECTURE_S390X}
        ),
    }


class FakeRegistryInspector:
    def get_compatible_architectures_set(
        self,
        image_reference: str,
        pull_secrets: list[bytes],
        cancel: threading.Event | None = None,
    ) -> frozenset[str]:
        # References arrive with a transport prefix, e.g. "//my-registry.io/...".
        if image_reference.startswith("//"):
            image_reference = image_reference[2:]
        architectures = mock_images_architecture_map().get(image_reference)
        if architectures is None:
            raise ImageInspectionError("image not found")
        return architectures
