"""
Shared fixtures for verifier tests
"""

import pytest

from r0verifier.testing import make_fixture


@pytest.fixture(scope="session")
def groth16_fixture():
    """A verification key with a matching, pre-negated proof"""
    return make_fixture()


@pytest.fixture(scope="session")
def verification_key(groth16_fixture):
    return groth16_fixture.verification_key
