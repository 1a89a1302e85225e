"""Unit tests for reuse protection and error propagation."""

import logging

import pytest

from distinct_value import (
    ConnectionMode,
    ConnectionState,
    DistinctValueConnectableObservable,
    PolicyEvaluationError,
    ReuseError,
)
from tests.utils import Recorder


@pytest.mark.unit
@pytest.mark.lifecycle
@pytest.mark.parametrize(
    "first, second",
    [
        ("connect", "connect"),
        ("connect", "ref_count"),
        ("connect", "auto_connect"),
        ("ref_count", "ref_count"),
        ("ref_count", "connect"),
        ("auto_connect", "auto_connect"),
        ("auto_connect", "ref_count"),
    ],
)
def test_second_activation_is_rejected(source, first, second):
    """Any activation after the first one raises ReuseError"""
    adapter = DistinctValueConnectableObservable(source)
    getattr(adapter, first)()

    with pytest.raises(ReuseError):
        getattr(adapter, second)()


@pytest.mark.unit
@pytest.mark.lifecycle
def test_rejected_activation_leaves_existing_connection_untouched(source, recorder):
    """The original activation keeps working after a rejected one"""
    adapter = DistinctValueConnectableObservable(source)
    adapter.connect()
    recorder.attach(adapter)

    with pytest.raises(ReuseError):
        adapter.ref_count()
    source.emit(1)

    assert recorder.values == [1]
    assert adapter.mode is ConnectionMode.MANUAL
    assert source.subscribe_count == 1


@pytest.mark.unit
@pytest.mark.lifecycle
def test_activation_after_close_is_rejected(source):
    """A closed adapter cannot be reconnected"""
    adapter = DistinctValueConnectableObservable(source)
    adapter.connect().dispose()

    with pytest.raises(ReuseError):
        adapter.connect()


@pytest.mark.unit
@pytest.mark.observable
def test_upstream_error_is_forwarded_verbatim(source, recorder):
    """Listeners receive the upstream's own exception object"""
    adapter = DistinctValueConnectableObservable(source)
    adapter.connect()
    recorder.attach(adapter)
    error = ValueError("upstream failed")

    source.emit(1)
    source.fail(error)

    assert recorder.values == [1]
    assert recorder.errors == [error]


@pytest.mark.unit
@pytest.mark.observable
def test_upstream_error_keeps_cache_and_does_not_close(source, recorder):
    """After an upstream error the value survives and new listeners get it"""
    adapter = DistinctValueConnectableObservable(source)
    adapter.connect()
    recorder.attach(adapter)
    source.emit(1)

    source.fail(ValueError("upstream failed"))

    assert adapter.value == 1
    assert adapter.state is ConnectionState.ACTIVE
    late = Recorder()
    late.attach(adapter)
    assert late.values == [1]
    assert not late.completed


@pytest.mark.unit
@pytest.mark.lifecycle
def test_ref_count_resubscribes_after_upstream_error(source):
    """An error drops the listener count to zero; the next listener reconnects"""
    stream = DistinctValueConnectableObservable(source).ref_count()
    Recorder().attach(stream)
    source.fail(ValueError("first run failed"))

    retry = Recorder()
    retry.attach(stream)
    source.emit(5)

    assert source.subscribe_count == 2
    assert retry.values == [5]


@pytest.mark.unit
@pytest.mark.observable
def test_policy_error_is_surfaced_and_cancels_upstream(source, recorder):
    """A raising policy ends the emission with PolicyEvaluationError"""
    failure = KeyError("missing")

    def equals(previous, next):
        if next == "bad":
            raise failure
        return previous == next

    adapter = DistinctValueConnectableObservable(source, equals=equals)
    adapter.connect()
    recorder.attach(adapter)

    source.emit("good", "bad", "ignored")

    assert recorder.values == ["good"]
    assert len(recorder.errors) == 1
    assert isinstance(recorder.errors[0], PolicyEvaluationError)
    assert recorder.errors[0].__cause__ is failure
    assert adapter.value == "good"
    assert source.active_subscriptions == 0
    assert not adapter.is_connected


@pytest.mark.unit
@pytest.mark.edge_case
def test_lifecycle_transitions_are_logged(source, caplog):
    """Activation, subscription and duplicates are logged at DEBUG"""
    with caplog.at_level(logging.DEBUG, logger="distinct_value"):
        adapter = DistinctValueConnectableObservable(source)
        adapter.connect()
        source.emit(1, 1)

    messages = [record.getMessage() for record in caplog.records]
    assert "Activated with connect()" in messages
    assert "Dropped duplicate value 1" in messages


@pytest.mark.unit
@pytest.mark.edge_case
def test_upstream_error_is_logged_as_warning(source, recorder, caplog):
    """Surfaced upstream errors produce a WARNING record"""
    adapter = DistinctValueConnectableObservable(source)
    adapter.connect()
    recorder.attach(adapter)

    with caplog.at_level(logging.WARNING, logger="distinct_value"):
        source.fail(ValueError("boom"))

    assert any(record.levelno == logging.WARNING for record in caplog.records)
