"""Admission review models exchanged with the Kubernetes API server."""

from __future__ import annotations

import base64
import json
from http import HTTPStatus
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from podplacement_webhook.constants import (
    ADMISSION_REVIEW_API_VERSION,
    ADMISSION_REVIEW_KIND,
    JSON_PATCH_TYPE,
)


class ReviewRequest(BaseModel):
    uid: str = Field(min_length=1)
    namespace: str = ""
    operation: str = "CREATE"
    object: Optional[Any] = None


class AdmissionReview(BaseModel):
    apiVersion: str = ADMISSION_REVIEW_API_VERSION
    kind: str = ADMISSION_REVIEW_KIND
    request: ReviewRequest


class AdmissionRequest(BaseModel):
    """One admission call: the original object travels as raw JSON bytes."""

    model_config = ConfigDict(frozen=True)

    uid: str = ""
    namespace: str = ""
    operation: str = "CREATE"
    raw: bytes = b""

    @classmethod
    def from_review(cls, review: AdmissionReview) -> AdmissionRequest:
        request = review.request
        raw = b""
        if request.object is not None:
            raw = json.dumps(request.object, separators=(",", ":")).encode("utf-8")
        return cls(
            uid=request.uid,
            namespace=request.namespace,
            operation=request.operation,
            raw=raw,
        )


class Status(BaseModel):
    code: int
    message: str = ""


class AdmissionResponse(BaseModel):
    allowed: bool
    result: Optional[Status] = None
    patch_type: Optional[str] = None
    patches: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def errored(cls, code: int, error: Exception | str) -> AdmissionResponse:
        return cls(allowed=False, result=Status(code=int(code), message=str(error)))

    @classmethod
    def patch_response(cls, patches: list[dict[str, Any]]) -> AdmissionResponse:
        if not patches:
            return cls(allowed=True, result=Status(code=int(HTTPStatus.OK)))
        return cls(
            allowed=True,
            result=Status(code=int(HTTPStatus.OK)),
            patch_type=JSON_PATCH_TYPE,
            patches=patches,
        )

    def to_review(self, uid: str, api_version: str = ADMISSION_REVIEW_API_VERSION) -> dict[str, Any]:
        """Wrap the response in an AdmissionReview document, base64-encoding the patch."""
        response: dict[str, Any] = {"uid": uid, "allowed": self.allowed}
        if self.result is not None:
            response["status"] = self.result.model_dump()
        if self.patch_type and self.patches:
            response["patchType"] = self.patch_type
            response["patch"] = base64.b64encode(json.dumps(self.patches).encode("utf-8")).decode("ascii")
        return {
            "apiVersion": api_version,
            "kind": ADMISSION_REVIEW_KIND,
            "response": response,
        }
