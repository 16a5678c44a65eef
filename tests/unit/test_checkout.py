"""Unit tests for the checkout orchestrator.

The gateway is replaced with FakeGateway; sessions resolve only when the
test says so (complete / expire).
"""

import json
from datetime import timedelta

import pytest

from storefront.data.models.checkout_session import CheckoutSessionModel
from storefront.domain.errors import (
    EmptyCart,
    GatewayError,
    GatewayNotConfigured,
    InvalidInput,
    NotFound,
    SessionUnresolved,
    Unauthorized,
)
from tests.fakes import ADMIN, ALICE

SUCCESS_URL = "https://shop.test/payment-success"
CANCEL_URL = "https://shop.test/payment-failure"


@pytest.fixture
def products(catalog):
    a = catalog.create_product(ADMIN, "A", 500, "Produkt A", [])
    b = catalog.create_product(ADMIN, "B", 1200, "Produkt B", [])
    return a, b


@pytest.fixture
def filled_cart(cart, products):
    a, b = products
    cart.add_product(ALICE, a.id, 2)
    cart.add_product(ALICE, b.id, 1)
    return cart


def _create(checkout):
    return json.loads(checkout.create_checkout_session(ALICE, SUCCESS_URL, CANCEL_URL))


def _session_count(db_session):
    return db_session.query(CheckoutSessionModel).count()


# ---------------------------------------------------------------------------
# create_checkout_session
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_empty_cart_never_calls_gateway(checkout, configured, gateway, db_session):
    with pytest.raises(EmptyCart):
        _create(checkout)

    assert gateway.created == []
    assert _session_count(db_session) == 0


@pytest.mark.unit
def test_unconfigured_gateway(checkout, filled_cart, gateway):
    with pytest.raises(GatewayNotConfigured):
        _create(checkout)

    assert gateway.created == []


@pytest.mark.unit
def test_empty_cart_reported_before_missing_configuration(checkout, config, gateway, db_session):
    assert config.is_configured() is False

    with pytest.raises(EmptyCart):
        _create(checkout)

    assert gateway.created == []
    assert _session_count(db_session) == 0


@pytest.mark.unit
def test_create_session_snapshots_cart(checkout, configured, filled_cart, gateway, products):
    session = _create(checkout)

    assert session["id"] == "cs_test_1"
    assert session["url"] == "https://checkout.stripe.test/pay/cs_test_1"

    call = gateway.created[0]
    assert call["secret_key"] == "sk_test_123"
    assert call["client_reference_id"] == ALICE
    assert call["allowed_countries"] == ["US", "PL"]
    assert call["success_url"] == SUCCESS_URL + "?session_id={CHECKOUT_SESSION_ID}"
    assert call["cancel_url"] == CANCEL_URL
    assert [(i["product_name"], i["quantity"], i["price_in_cents"], i["currency"]) for i in call["line_items"]] == [
        ("A", 2, 500, "usd"),
        ("B", 1, 1200, "usd"),
    ]


@pytest.mark.unit
def test_create_session_does_not_clear_cart(checkout, configured, filled_cart):
    _create(checkout)

    assert filled_cart.get_summary(ALICE)["total_amount"] == 2200


@pytest.mark.unit
def test_snapshot_survives_catalog_edits(checkout, configured, filled_cart, catalog, products):
    a, b = products
    session = _create(checkout)

    catalog.update_product(ADMIN, a.id, "A", 9999, "Drozszy", [])
    catalog.delete_product(ADMIN, b.id)

    items = checkout.get_line_items(session["id"])
    assert [(i.product_name, i.quantity, i.price_in_cents) for i in items] == [
        ("A", 2, 500),
        ("B", 1, 1200),
    ]
    # koszyk dalej liczy po aktualnych cenach
    assert filled_cart.get_summary(ALICE)["total_amount"] == 2 * 9999


@pytest.mark.unit
def test_every_call_creates_new_session(checkout, configured, filled_cart, db_session):
    first = _create(checkout)
    second = _create(checkout)

    assert first["id"] != second["id"]
    assert _session_count(db_session) == 2


@pytest.mark.unit
def test_gateway_failure_leaves_no_session(checkout, configured, filled_cart, gateway, db_session):
    gateway.fail_create = GatewayError("timeout")

    with pytest.raises(GatewayError):
        _create(checkout)

    assert _session_count(db_session) == 0
    assert filled_cart.get_summary(ALICE)["total_amount"] == 2200


@pytest.mark.unit
def test_cart_lock_not_held_during_gateway_call(checkout, configured, filled_cart, gateway, lock_service):
    original = gateway.create_session
    seen_locks = []

    def checking(**kwargs):
        seen_locks.append(dict(lock_service.locks))
        return original(**kwargs)

    gateway.create_session = checking
    _create(checkout)

    assert seen_locks == [{}]
    assert ALICE in lock_service.acquired


@pytest.mark.unit
@pytest.mark.parametrize(
    "success_url,cancel_url",
    [("payment-success", CANCEL_URL), (SUCCESS_URL, "ftp://shop.test/x"), ("", "")],
)
def test_redirect_urls_must_be_absolute(checkout, configured, filled_cart, gateway, success_url, cancel_url):
    with pytest.raises(InvalidInput):
        checkout.create_checkout_session(ALICE, success_url, cancel_url)

    assert gateway.created == []


@pytest.mark.unit
def test_existing_placeholder_is_kept(checkout, configured, filled_cart, gateway):
    url = "https://shop.test/ok?ref=x&sid={CHECKOUT_SESSION_ID}"
    checkout.create_checkout_session(ALICE, url, CANCEL_URL)

    assert gateway.created[0]["success_url"] == url


@pytest.mark.unit
def test_checkout_requires_principal(checkout, configured):
    with pytest.raises(Unauthorized):
        checkout.create_checkout_session(None, SUCCESS_URL, CANCEL_URL)


# ---------------------------------------------------------------------------
# get_session_status
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_unknown_session(checkout, configured):
    with pytest.raises(NotFound):
        checkout.get_session_status("cs_missing")


@pytest.mark.unit
def test_open_session_is_unresolved(checkout, configured, filled_cart, db_session):
    session = _create(checkout)

    with pytest.raises(SessionUnresolved):
        checkout.get_session_status(session["id"])

    assert db_session.get(CheckoutSessionModel, session["id"]).status == "pending"


@pytest.mark.unit
def test_complete_but_unpaid_is_unresolved(checkout, configured, filled_cart, gateway):
    session = _create(checkout)
    gateway.complete(session["id"], payment_status="unpaid")

    with pytest.raises(SessionUnresolved):
        checkout.get_session_status(session["id"])


@pytest.mark.unit
def test_paid_session_completes(checkout, configured, filled_cart, gateway):
    session = _create(checkout)
    gateway.complete(session["id"])

    status = checkout.get_session_status(session["id"])

    assert status["kind"] == "completed"
    assert status["completed"]["user_principal"] == ALICE
    assert json.loads(status["completed"]["response"])["id"] == session["id"]


@pytest.mark.unit
def test_terminal_status_is_permanent(checkout, configured, filled_cart, gateway):
    session = _create(checkout)
    gateway.complete(session["id"])
    first = checkout.get_session_status(session["id"])
    lookups = len(gateway.lookups)

    gateway.expire(session["id"])
    second = checkout.get_session_status(session["id"])

    assert second == first
    assert len(gateway.lookups) == lookups


@pytest.mark.unit
def test_expired_session_fails(checkout, configured, filled_cart, gateway, db_session):
    session = _create(checkout)
    gateway.expire(session["id"])

    status = checkout.get_session_status(session["id"])

    assert status["kind"] == "failed"
    assert status["failed"]["error"]
    stored = db_session.get(CheckoutSessionModel, session["id"])
    assert stored.status == "failed"
    assert stored.resolved_at is not None


@pytest.mark.unit
def test_lookup_error_surfaces_and_changes_nothing(checkout, configured, filled_cart, gateway, db_session):
    session = _create(checkout)
    gateway.fail_lookup = GatewayError("503")

    with pytest.raises(GatewayError):
        checkout.get_session_status(session["id"])

    assert len(gateway.lookups) == 1
    assert db_session.get(CheckoutSessionModel, session["id"]).status == "pending"
    assert filled_cart.get_summary(ALICE)["total_amount"] == 2200


# ---------------------------------------------------------------------------
# reconcile_pending
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_reconcile_resolves_terminal_sessions(checkout, configured, filled_cart, gateway, db_session):
    paid = _create(checkout)
    still_open = _create(checkout)
    expired = _create(checkout)
    gateway.complete(paid["id"])
    gateway.expire(expired["id"])

    assert checkout.reconcile_pending(timedelta(0)) == 2

    assert db_session.get(CheckoutSessionModel, paid["id"]).status == "completed"
    assert db_session.get(CheckoutSessionModel, expired["id"]).status == "failed"
    assert db_session.get(CheckoutSessionModel, still_open["id"]).status == "pending"


@pytest.mark.unit
def test_reconcile_skips_young_sessions(checkout, configured, filled_cart, gateway):
    session = _create(checkout)
    gateway.complete(session["id"])

    assert checkout.reconcile_pending(timedelta(hours=1)) == 0
    assert gateway.lookups == []


@pytest.mark.unit
def test_reconcile_survives_gateway_errors(checkout, configured, filled_cart, gateway):
    _create(checkout)
    gateway.fail_lookup = GatewayError("down")

    assert checkout.reconcile_pending(timedelta(0)) == 0
