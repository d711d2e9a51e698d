# tests/test_net_model.py

import logging

import pytest

from pert_net import (
    Activity,
    MalformedNetworkError,
    MissingActivityError,
    NetworkModel,
    NotScheduledError,
    ReverseActivityError,
    UnknownEventError,
)


def _cyclic_network():
    """1 -> 2 -> 3 -> 4 -> 2 loop with 3 -> 5 exit."""
    net = NetworkModel()
    net.add_activity(1, 2, 1)
    net.add_activity(2, 3, 1)
    net.add_activity(3, 4, 1)
    net.add_activity(4, 2, 1)
    net.add_activity(3, 5, 1)
    net.schedule(0, 10)
    return net


# ---------------------- activities ----------------------


def test_activity_ordering_and_reverse():
    a = Activity(1, 2)
    assert a == (1, 2)
    assert a.reverse() == Activity(2, 1)
    assert sorted([Activity(2, 1), Activity(1, 3), Activity(1, 2)]) == [
        Activity(1, 2),
        Activity(1, 3),
        Activity(2, 1),
    ]
    assert a.precedes(2) and not a.precedes(1)
    assert a.follows(1) and not a.follows(2)
    assert repr(a) == "1--->2"


# ---------------------- graph primitives ----------------------


def test_initial_and_terminal_events(diamond):
    assert diamond.initial_events() == {1}
    assert diamond.terminal_events() == {4}
    assert diamond.initial_event() == 1
    assert diamond.terminal_event() == 4
    assert diamond.events() == [1, 2, 3, 4]


def test_incoming_and_outgoing_activities(diamond):
    assert diamond.incoming_activities(4) == {Activity(2, 4), Activity(3, 4)}
    assert diamond.outgoing_activities(1) == {Activity(1, 2), Activity(1, 3)}
    assert diamond.incoming_activities(1) == set()
    assert diamond.outgoing_activities(4) == set()


def test_duplicate_reverse_is_rejected(caplog):
    net = NetworkModel()
    assert net.add_activity(1, 2, 5) is True
    with caplog.at_level(logging.WARNING, logger="pert_net.net_model"):
        assert net.add_activity(2, 1, 3) is False

    assert net.activities() == {Activity(1, 2)}
    assert net.estimated_duration((1, 2)) == 5
    assert "reverse activity" in caplog.text


def test_duplicate_reverse_strict():
    net = NetworkModel(strict=True)
    net.add_activity(1, 2, 5)
    with pytest.raises(ReverseActivityError):
        net.add_activity(2, 1, 3)
    assert len(net) == 1


def test_add_same_activity_updates_duration():
    net = NetworkModel()
    net.add_activity(1, 2, 5)
    net.add_activity(1, 2, 7)
    assert len(net) == 1
    assert net.estimated_duration(Activity(1, 2)) == 7


def test_delete_activity(diamond):
    assert diamond.delete_activity(1, 2) is True
    assert (1, 2) not in diamond
    assert diamond.delete_activity(1, 2) is False
    assert diamond.delete_activity(Activity(3, 4)) is True
    assert len(diamond) == 2


def test_missing_activity_duration(diamond):
    with pytest.raises(MissingActivityError) as exc:
        diamond.estimated_duration((1, 4))
    assert isinstance(exc.value, KeyError)
    assert exc.value.activity == Activity(1, 4)
    assert diamond.get_duration((1, 4)) is None
    assert diamond.get_duration((1, 4), default=0) == 0


def test_set_estimated_duration_upserts(diamond):
    diamond.set_estimated_duration((1, 2), 10)
    assert diamond.estimated_duration((1, 2)) == 10
    assert diamond.earliest_occurence(4) == 11

    assert diamond.set_estimated_duration((4, 5), 2) is True
    assert diamond.terminal_events() == {5}

    # new activities obey add_activity rules
    assert diamond.set_estimated_duration((2, 1), 1) is False


def test_constructor_from_mapping():
    net = NetworkModel({(1, 2): 3, (2, 3): 4}, initial_time=0, terminal_time=7)
    assert net.is_scheduled
    assert net.earliest_occurence(3) == 7
    assert list(net) == [Activity(1, 2), Activity(2, 3)]


def test_copy_is_independent(diamond):
    other = diamond.copy()
    other.add_activity(4, 5, 1)
    other.schedule(1, 9)
    assert len(diamond) == 4
    assert diamond.initial_time == 0
    assert diamond.terminal_time == 7


# ---------------------- forward and backward pass ----------------------


def test_forward_pass(dummy):
    expected = {1: 0, 2: 2, 3: 6, 4: 2, 5: 7, 6: 11, 7: 1, 8: 10, 9: 15}
    assert {e: dummy.earliest_occurence(e) for e in dummy.events()} == expected
    assert dummy.earliest_finish((4, 8)) == 10
    assert dummy.earliest_start((4, 8)) == 2
    assert dummy.project_duration() == 15


def test_backward_pass(dummy):
    expected = {1: 6, 2: 13, 3: 17, 4: 8, 5: 14, 6: 18, 7: 13, 8: 16, 9: 21}
    assert {e: dummy.latest_occurence(e) for e in dummy.events()} == expected
    assert dummy.latest_start((4, 8)) == 8
    assert dummy.latest_finish((4, 8)) == 16
    assert dummy.event_slack(9) == 6


def test_schedule_invalidates_cached_times(diamond):
    assert diamond.earliest_occurence(4) == 7
    diamond.schedule(3, 10)
    assert diamond.earliest_occurence(4) == 10
    diamond.add_activity(2, 3, 10)
    assert diamond.earliest_occurence(4) == 15


def test_time_query_before_schedule():
    net = NetworkModel({(1, 2): 3})
    with pytest.raises(NotScheduledError):
        net.earliest_occurence(1)


def test_unknown_event(diamond):
    with pytest.raises(UnknownEventError):
        diamond.earliest_occurence(99)
    with pytest.raises(UnknownEventError):
        diamond.latest_occurence(99)


def test_several_initial_events_are_rejected():
    net = NetworkModel({(1, 2): 1, (3, 2): 1}, initial_time=0, terminal_time=5)
    assert not net.is_well_formed()
    with pytest.raises(MalformedNetworkError):
        net.earliest_occurence(2)
    # the backward pass only needs the single terminal event
    assert net.latest_occurence(1) == 4


def test_cycle_is_reported_by_passes():
    net = _cyclic_network()
    with pytest.raises(MalformedNetworkError, match="cycle"):
        net.earliest_occurence(5)


def test_stages_and_topological_order(diamond):
    assert diamond.stages() == {1: 0, 2: 1, 3: 1, 4: 2}
    assert diamond.topological_order() == [1, 2, 3, 4]


def test_generic_durations():
    net = NetworkModel({("a", "b"): 1.5, ("b", "c"): 2.25})
    net.schedule(0.0, 10.0)
    assert net.earliest_occurence("c") == pytest.approx(3.75)
    assert net.latest_occurence("a") == pytest.approx(6.25)


# ---------------------- floats ----------------------


def test_floats(dummy):
    a = Activity(7, 8)
    assert dummy.activity_float(a) == 6
    assert dummy.free_float(a) == 12
    assert dummy.interfering_float(a) == 0
    assert dummy.independent_float(a) == 6

    a = Activity(5, 6)
    assert dummy.activity_float(a) == 0
    assert dummy.free_float(a) == 7
    assert dummy.independent_float(a) == 7


def test_interfering_float_is_clamped_at_zero(diamond):
    diamond.schedule(0, 10)
    assert diamond.interfering_float((1, 2)) == 0


def test_interfering_float_positive_on_overdue_schedule(diamond):
    # terminal time earlier than the shortest project duration
    diamond.schedule(0, 5)
    assert diamond.latest_occurence(1) == -2
    assert diamond.interfering_float((1, 3)) == 2
    assert diamond.interfering_float((3, 4)) == 2


@pytest.mark.parametrize("fixture", ["diamond", "dummy"])
def test_floats_non_negative_on_tight_schedule(request, fixture):
    net = request.getfixturevalue(fixture)
    net.schedule(0, net.earliest_occurence(net.terminal_event()))

    free = [net.free_float(a) for a in net.activities()]
    assert all(f >= 0 for f in free)
    assert all(net.activity_float(a) >= 0 for a in net.activities())
    assert any(f == 0 for f in free)


def test_float_of_missing_activity(diamond):
    with pytest.raises(MissingActivityError):
        diamond.free_float((1, 4))


# ---------------------- well formedness, loops, paths ----------------------


def test_well_formed(diamond):
    assert diamond.is_well_formed()
    assert not NetworkModel().is_well_formed()


def test_loop_paths():
    net = _cyclic_network()
    assert net.initial_events() == {1}
    assert net.terminal_events() == {5}
    assert net.loop_paths(1, 5) == [[1, 2, 3, 4, 2]]
    assert not net.is_well_formed()


def test_unreachable_loop_is_not_well_formed():
    # 2 -> 3 -> 5 -> 2 has no entry from the initial event 1
    net = NetworkModel({(1, 4): 1, (2, 3): 1, (3, 5): 1, (5, 2): 1})
    assert net.initial_events() == {1}
    assert net.terminal_events() == {4}
    assert net.loop_paths(1, 4) == []
    assert not net.is_well_formed()

    net.schedule(0, 10)
    with pytest.raises(MalformedNetworkError):
        net.earliest_occurence(4)


def test_loop_paths_empty_on_dag(dummy):
    assert dummy.loop_paths(1, 9) == []


def test_paths_diamond(diamond):
    paths = diamond.paths(1, 4)
    assert paths == [
        [(Activity(1, 2), 1), (Activity(2, 4), 1)],
        [(Activity(1, 3), 6), (Activity(3, 4), 1)],
    ]
    for path in paths:
        events = [path[0][0].trigger] + [a.completion for a, _ in path]
        assert len(events) == len(set(events))


def test_paths_skip_loops():
    net = _cyclic_network()
    paths = net.paths(1, 5)
    assert paths == [[(Activity(1, 2), 1), (Activity(2, 3), 1), (Activity(3, 5), 1)]]


def test_paths_dummy(dummy):
    paths = dummy.paths(1, 9)
    assert len(paths) == 4
    assert dummy.paths(1, 6) == [
        [(Activity(1, 2), 2), (Activity(2, 3), 4), (Activity(3, 6), 1)],
        [(Activity(1, 4), 2), (Activity(4, 5), 5), (Activity(5, 6), 4)],
    ]
    assert dummy.paths(9, 1) == []
    assert dummy.paths(42, 9) == []


def test_paths_same_event_and_empty_network(diamond):
    assert diamond.paths(1, 1) == []
    assert diamond.paths(4, 4) == []
    assert NetworkModel().paths(1, 2) == []


# ---------------------- critical path and sub-networks ----------------------


def test_critical_path_diamond(diamond):
    critical = diamond.find_critical_path()
    assert critical == [(Activity(1, 3), 6), (Activity(3, 4), 1)]
    assert sum(d for _, d in critical) == 7
    assert diamond.earliest_occurence(4) == 7


def test_critical_path_uses_tight_schedule(dummy):
    assert dummy.find_critical_path() == [
        (Activity(1, 4), 2),
        (Activity(4, 8), 8),
        (Activity(8, 9), 5),
    ]
    # receiver keeps its own schedule
    assert dummy.terminal_time == 21


def test_critical_path_with_shifted_start(diamond):
    diamond.schedule(100, 200)
    assert [a for a, _ in diamond.find_critical_path()] == [Activity(1, 3), Activity(3, 4)]


def test_critical_path_parallel_chains():
    net = NetworkModel({(1, 2): 3, (1, 3): 3, (2, 4): 3, (3, 4): 3}, 0, 6)
    assert len(net.find_critical_path()) == 4
    assert net.critical_chains() == [
        [(Activity(1, 2), 3), (Activity(2, 4), 3)],
        [(Activity(1, 3), 3), (Activity(3, 4), 3)],
    ]


def test_critical_path_float_rounding():
    net = NetworkModel({(1, 2): 0.1, (2, 3): 0.2, (1, 3): 0.3}, 0.0, 1.0)
    assert [a for a, _ in net.find_critical_path()] == [
        Activity(1, 2),
        Activity(1, 3),
        Activity(2, 3),
    ]


def test_subnet(dummy):
    sub = dummy.subnet(1, 6)
    assert sub.activities() == {
        Activity(1, 2),
        Activity(2, 3),
        Activity(3, 6),
        Activity(1, 4),
        Activity(4, 5),
        Activity(5, 6),
    }
    assert sub.initial_time == 0
    assert sub.terminal_time == 18
    assert sub.is_well_formed()
    assert sub.earliest_occurence(6) == 11
    assert sub.estimated_duration((4, 5)) == 5
    # receiver untouched
    assert len(dummy) == 11


def test_container_protocol(diamond):
    assert len(diamond) == 4
    assert (1, 2) in diamond
    assert Activity(1, 4) not in diamond
    assert 7 not in diamond
    assert list(diamond)[0] == Activity(1, 2)
    assert "1--->3  : 6" in repr(diamond)
