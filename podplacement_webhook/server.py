"""HTTP entrypoint serving the scheduling-gate webhook."""

from __future__ import annotations

import argparse
import base64
import json
import logging
import os
import sys
from http import HTTPStatus

from flask import Flask, jsonify, request
from kubernetes.client import ApiClient
from pydantic import ValidationError

from podplacement_webhook.admission import AdmissionRequest, AdmissionResponse, AdmissionReview
from podplacement_webhook.constants import WEBHOOK_PATH
from podplacement_webhook.webhook import PodSchedulingGateMutatingWebhook
from podplacement_webhook.webhook_config import WebhookConfig
from podplacement_webhook.webhook_logging_config import configure_logging
from podplacement_webhook.webhook_registration import build_mutating_webhook_configuration

logger = logging.getLogger(__name__)


def _review_error(code: int, message: str, uid: str = ""):
    return jsonify(AdmissionResponse.errored(code, message).to_review(uid))


def create_app(config: WebhookConfig, webhook: PodSchedulingGateMutatingWebhook | None = None) -> Flask:
    """Build the Flask app; the webhook and its codec are created here, before any request."""
    webhook = webhook or PodSchedulingGateMutatingWebhook(config)
    app = Flask(__name__)

    @app.post(WEBHOOK_PATH)
    def add_pod_scheduling_gate():
        if not request.is_json:
            return _review_error(
                HTTPStatus.BAD_REQUEST,
                f"contentType={request.content_type}, expected application/json",
            )
        try:
            review = AdmissionReview.model_validate_json(request.get_data())
        except ValidationError as exc:
            logger.warning("Unable to decode admission review: %s", exc)
            return _review_error(HTTPStatus.BAD_REQUEST, f"unable to decode admission review: {exc}")

        admission_request = AdmissionRequest.from_review(review)
        response = webhook.handle(admission_request)
        return jsonify(response.to_review(admission_request.uid, review.apiVersion))

    @app.get("/healthz")
    @app.get("/readyz")
    def healthz():
        return "ok"

    return app


def _serve(args: argparse.Namespace) -> int:
    config = WebhookConfig.from_env()
    configure_logging(config.log_level)
    app = create_app(config)

    ssl_context = None
    if not args.insecure:
        for path in (config.tls_cert_file, config.tls_key_file):
            if not os.path.isfile(path):
                logger.error("TLS file %s not found; mount the serving certificate or pass --insecure", path)
                return 1
        ssl_context = (config.tls_cert_file, config.tls_key_file)

    logger.info(
        "Serving %s on %s:%d (operator namespace %s)",
        WEBHOOK_PATH,
        config.bind_address,
        config.port,
        config.operator_namespace,
    )
    app.run(host=config.bind_address, port=config.port, ssl_context=ssl_context, threaded=True)
    return 0


def _registration(args: argparse.Namespace) -> int:
    config = WebhookConfig.from_env()
    ca_bundle = None
    if args.ca_bundle_file:
        with open(args.ca_bundle_file, "rb") as handle:
            ca_bundle = base64.b64encode(handle.read()).decode("ascii")

    manifest = build_mutating_webhook_configuration(
        config,
        service_name=args.service_name,
        service_namespace=args.service_namespace or config.operator_namespace,
        ca_bundle=ca_bundle,
    )
    print(json.dumps(ApiClient().sanitize_for_serialization(manifest), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Pod placement scheduling-gate admission webhook.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the admission webhook server.")
    serve.add_argument("--insecure", action="store_true", help="Serve plain HTTP instead of TLS (local testing only).")
    serve.set_defaults(func=_serve)

    registration = subparsers.add_parser("registration", help="Print the MutatingWebhookConfiguration as JSON.")
    registration.add_argument("--service-name", required=True, help="Service fronting the webhook pods.")
    registration.add_argument(
        "--service-namespace",
        default=None,
        help="Namespace of the Service. Defaults to the operator namespace.",
    )
    registration.add_argument("--ca-bundle-file", default=None, help="PEM CA bundle that signed the serving cert.")
    registration.set_defaults(func=_registration)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
