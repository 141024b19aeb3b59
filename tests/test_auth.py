# -*- coding: utf-8 -*-
"""
Tests for nonce generation and request signing.
"""

import base64
import hashlib
import hmac
import threading

import pytest

from kraken_client.auth import (
    ApiCredentials,
    KrakenSigner,
    NonceSource,
    default_nonce_source,
    sign,
)
from kraken_client.exceptions import AuthError
from kraken_client.models.endpoint import EndpointDescriptor, MethodType

from conftest import TEST_API_KEY, TEST_API_SECRET


# Published signing example for the AddOrder endpoint
VECTOR_PATH = "/0/private/AddOrder"
VECTOR_NONCE = "1616492376594"
VECTOR_POST_DATA = (
    "nonce=1616492376594&ordertype=limit&pair=XBTUSD&price=37500&type=buy&volume=1.25"
)
VECTOR_SIGNATURE = (
    "4/dpxb3iT4tp/ZCVEwSnEsLxx0bqyhLpdfOpc6fn7OR8+UClSV5n9E6aSS8MPtnRfp32bAb0nmbRn6H8ndwLUQ=="
)


def reference_signature(path: str, nonce: str, post_data: str, secret: str) -> str:
    digest = hashlib.sha256((nonce + post_data).encode()).digest()
    mac = hmac.new(base64.b64decode(secret), path.encode() + digest, hashlib.sha512)
    return base64.b64encode(mac.digest()).decode()


class TestNonceSource:
    """Test strictly increasing nonces."""

    def test_wall_clock_nonces_strictly_increase(self):
        source = NonceSource()
        nonces = [int(source.next()) for _ in range(1000)]

        assert all(b > a for a, b in zip(nonces, nonces[1:]))

    def test_nonce_is_digit_string(self):
        assert NonceSource().next().isdigit()

    def test_stepping_clock_is_used(self, stepping_nonce_source):
        assert stepping_nonce_source.next() == "1000"
        assert stepping_nonce_source.next() == "1001"

    def test_frozen_clock_falls_back_to_counter(self, frozen_nonce_source):
        nonces = [frozen_nonce_source.next() for _ in range(3)]

        assert nonces == ["5000", "5001", "5002"]

    def test_clock_stepping_backwards_never_regresses(self):
        readings = iter([2000, 1500, 1500, 2500])
        source = NonceSource(clock=lambda: next(readings))

        nonces = [int(source.next()) for _ in range(4)]

        assert nonces == [2000, 2001, 2002, 2500]

    def test_concurrent_callers_get_distinct_increasing_values(self):
        source = NonceSource(clock=lambda: 1)
        results = []
        lock = threading.Lock()

        def worker():
            local = [int(source.next()) for _ in range(200)]
            with lock:
                results.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 1600
        assert len(set(results)) == 1600

    def test_default_source_is_shared(self):
        assert default_nonce_source() is default_nonce_source()


class TestSign:
    """Test the signature function."""

    def test_matches_published_vector(self):
        signature = sign(VECTOR_PATH, VECTOR_NONCE, VECTOR_POST_DATA, TEST_API_SECRET)

        assert signature == VECTOR_SIGNATURE

    def test_matches_reference_formula(self):
        args = ("/0/private/Balance", "1234", "nonce=1234", TEST_API_SECRET)

        assert sign(*args) == reference_signature(*args)

    def test_deterministic(self):
        first = sign(VECTOR_PATH, VECTOR_NONCE, VECTOR_POST_DATA, TEST_API_SECRET)
        second = sign(VECTOR_PATH, VECTOR_NONCE, VECTOR_POST_DATA, TEST_API_SECRET)

        assert first == second

    @pytest.mark.parametrize("index", [0, 1, 2, 3])
    def test_changing_any_input_changes_signature(self, index):
        args = [VECTOR_PATH, VECTOR_NONCE, VECTOR_POST_DATA, TEST_API_SECRET]
        if index == 3:
            other_key = bytearray(base64.b64decode(TEST_API_SECRET))
            other_key[0] ^= 0x01
            args[3] = base64.b64encode(bytes(other_key)).decode()
        else:
            text = args[index]
            args[index] = text[:-1] + ("0" if text[-1] != "0" else "1")

        assert sign(*args) != VECTOR_SIGNATURE

    def test_invalid_base64_secret(self):
        with pytest.raises(AuthError, match="not valid base64") as exc_info:
            sign(VECTOR_PATH, VECTOR_NONCE, VECTOR_POST_DATA, "not*base64!")

        assert "not*base64!" not in str(exc_info.value)
        assert exc_info.value.__cause__ is None


class TestKrakenSigner:
    """Test the credential-bound signer."""

    def test_auth_headers_for_private_descriptor(self, signer):
        descriptor = EndpointDescriptor(
            method_type=MethodType.PRIVATE,
            endpoint_name="Balance",
            parameters={"nonce": "1616492376594"},
        )

        headers = signer.get_auth_headers(descriptor)

        assert headers["API-Key"] == TEST_API_KEY
        assert headers["API-Sign"] == reference_signature(
            "/0/private/Balance", "1616492376594", "nonce=1616492376594", TEST_API_SECRET
        )

    def test_signature_skips_blank_parameters(self, signer):
        descriptor = EndpointDescriptor(
            method_type=MethodType.PRIVATE,
            endpoint_name="ClosedOrders",
            parameters={"trades": "", "nonce": "42"},
        )

        headers = signer.get_auth_headers(descriptor)

        assert headers["API-Sign"] == reference_signature(
            "/0/private/ClosedOrders", "42", "nonce=42", TEST_API_SECRET
        )

    def test_private_descriptor_without_nonce(self, signer):
        descriptor = EndpointDescriptor(MethodType.PRIVATE, "Balance", {})

        with pytest.raises(AuthError, match="no nonce"):
            signer.get_auth_headers(descriptor)

    def test_public_descriptor_is_not_signed(self, signer):
        descriptor = EndpointDescriptor(MethodType.PUBLIC, "Spread", {"pair": "XBTUSD"})

        with pytest.raises(AuthError, match="public"):
            signer.get_auth_headers(descriptor)

    def test_nonce_uses_injected_source(self, signer):
        assert signer.nonce() == "1000"
        assert signer.nonce() == "1001"

    def test_validate_credentials(self, api_credentials):
        assert KrakenSigner(api_credentials).validate_credentials() is True
        assert KrakenSigner(ApiCredentials("key", "%%%")).validate_credentials() is False
        assert KrakenSigner(ApiCredentials("", TEST_API_SECRET)).validate_credentials() is False

    def test_credentials_repr_hides_secret(self, api_credentials):
        assert TEST_API_SECRET not in repr(api_credentials)
