from __future__ import annotations

import base64
import json

import pytest
from pydantic import ValidationError

from podplacement_webhook.admission import AdmissionRequest, AdmissionResponse, AdmissionReview


def test_request_from_review_keeps_object_as_raw_json():
    review = AdmissionReview.model_validate(
        {
            "request": {
                "uid": "abc",
                "namespace": "team-a",
                "operation": "CREATE",
                "object": {"apiVersion": "v1", "kind": "Pod"},
            }
        }
    )

    request = AdmissionRequest.from_review(review)

    assert request.uid == "abc"
    assert request.namespace == "team-a"
    assert json.loads(request.raw) == {"apiVersion": "v1", "kind": "Pod"}


def test_request_without_object_has_empty_raw():
    review = AdmissionReview.model_validate({"request": {"uid": "abc"}})

    assert AdmissionRequest.from_review(review).raw == b""


def test_review_requires_uid():
    with pytest.raises(ValidationError):
        AdmissionReview.model_validate({"request": {"uid": ""}})


def test_request_is_immutable():
    request = AdmissionRequest(uid="abc", raw=b"{}")

    with pytest.raises(ValidationError):
        request.raw = b"[]"


def test_errored_response_review():
    review = AdmissionResponse.errored(400, ValueError("bad pod")).to_review("abc")

    assert review["response"] == {
        "uid": "abc",
        "allowed": False,
        "status": {"code": 400, "message": "bad pod"},
    }


def test_patch_response_review_encodes_patch():
    patches = [{"op": "add", "path": "/metadata/labels", "value": {"a": "b"}}]

    review = AdmissionResponse.patch_response(patches).to_review("abc")

    assert review["response"]["allowed"] is True
    assert review["response"]["patchType"] == "JSONPatch"
    assert json.loads(base64.b64decode(review["response"]["patch"])) == patches


def test_empty_patch_response_has_no_patch_type():
    response = AdmissionResponse.patch_response([])

    assert response.allowed
    assert response.patch_type is None
    assert "patch" not in response.to_review("abc")["response"]
