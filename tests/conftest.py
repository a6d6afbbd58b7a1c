"""Shared fakes for controller tests.

FakeMappingService records every request and lets a test deliver
responses in any order, including to queries that were already
aborted (simulating a transport that loses the abort race).
"""

import pytest

from conformal.mapping import map_z_to_w


class FakeQuery:
    """Recorded request with manual completion."""

    def __init__(self, args, on_result, on_error):
        self.args = args
        self.on_result = on_result
        self.on_error = on_error
        self.aborted = False

    def abort(self):
        self.aborted = True

    def resolve(self, value):
        self.on_result(value)

    def fail(self, message="boom"):
        self.on_error(message)


class FakeMappingService:
    """MappingService whose responses are delivered by the test."""

    def __init__(self):
        self.map_queries = []
        self.compute_queries = []

    def map_point(self, z, on_result, on_error):
        query = FakeQuery((z,), on_result, on_error)
        self.map_queries.append(query)
        return query

    def compute(self, mode, count, on_result, on_error):
        query = FakeQuery((mode, count), on_result, on_error)
        self.compute_queries.append(query)
        return query


class ImmediateMappingService(FakeMappingService):
    """Answers map-point synchronously from the local map."""

    def map_point(self, z, on_result, on_error):
        query = super().map_point(z, on_result, on_error)
        on_result(map_z_to_w(z))
        return query


class RedrawCounter:
    def __init__(self):
        self.count = 0

    def __call__(self):
        self.count += 1


@pytest.fixture()
def service():
    return FakeMappingService()


@pytest.fixture()
def redraw():
    return RedrawCounter()


@pytest.fixture()
def immediate_service():
    return ImmediateMappingService()
