from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import domain_error_response, error_response
from ..container import Container
from ..core.exceptions import DomainError
from ..core.logging import get_logger
from ..tenancy.gate import current_principal

log = get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/stripe/check-subscription", methods=["GET"], endpoint="check_subscription")
    def check_subscription():
        principal = current_principal()
        if not principal.is_authenticated:
            return error_response("Unauthorized", 401)
        try:
            return jsonify(container.subscription_service.check_subscription(principal.user_id))
        except DomainError as e:
            return domain_error_response(e, event="subscription_check_failed", fallback="Internal server error")
        except Exception:
            log.exception("subscription_check_failed")
            return error_response("Internal server error", 500)

    @app.route("/api/stripe/get-price", methods=["GET"], endpoint="get_price")
    def get_price():
        try:
            return jsonify(container.subscription_service.get_price(request.args.get("productId")))
        except DomainError as e:
            return domain_error_response(e, event="price_lookup_failed", fallback="Internal server error")
        except Exception:
            log.exception("price_lookup_failed")
            return error_response("Internal server error", 500)

    @app.route("/api/webhooks/stripe", methods=["POST"], endpoint="stripe_webhook")
    def stripe_webhook():
        try:
            handled = container.subscription_service.handle_webhook(
                request.get_data(),
                request.headers.get("Stripe-Signature"),
            )
            return jsonify({"received": True, "handled": handled})
        except DomainError as e:
            return domain_error_response(e, event="stripe_webhook_failed", fallback="Webhook handling failed")
        except Exception:
            log.exception("stripe_webhook_failed")
            return error_response("Webhook handling failed", 500)
