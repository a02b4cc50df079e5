"""Unit tests for required and best-effort step policies."""

import pytest

from src.authbridge.core.errors import InvalidInputError, NotFoundError, StoreError
from src.authbridge.core.services.policies import best_effort, required


class TestRequired:
    def test_returns_value(self):
        assert required(lambda: 42) == 42

    def test_propagates_resolution_error(self):
        def step():
            raise NotFoundError("User not found: x")

        with pytest.raises(NotFoundError, match="User not found: x"):
            required(step)


class TestBestEffort:
    def test_returns_value(self):
        assert best_effort(lambda: "tenant", "lookup") == "tenant"

    @pytest.mark.parametrize("error", [InvalidInputError("bad"), NotFoundError("gone"), StoreError("down")])
    def test_resolution_error_becomes_none(self, error):
        def step():
            raise error

        assert best_effort(step, "enrichment") is None

    def test_unrelated_errors_propagate(self):
        def step():
            raise KeyError("party_id")

        with pytest.raises(KeyError):
            best_effort(step, "enrichment")
