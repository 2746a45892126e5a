from hypothesis import given, strategies as st

from app.services.relay_status import decode_relay_states, is_valid_frame
from tests.conftest import make_frame

settled_states = st.lists(st.integers(min_value=0, max_value=2), min_size=16, max_size=16)
any_states = st.lists(st.integers(min_value=0, max_value=255), min_size=16, max_size=16)
headers = st.binary(min_size=2, max_size=2)


@given(headers, settled_states)
def test_full_frame_decodes_sixteen_ascending_ids(header, states):
    relays = decode_relay_states(make_frame(states, header=header))
    assert [relay.id for relay in relays] == list(range(16))


@given(any_states)
def test_off_values_map_to_zero(states):
    relays = decode_relay_states(make_frame(states))
    for raw, relay in zip(states, relays):
        if raw in (0, 2):
            assert relay.state == 0
        else:
            assert relay.state == raw
            assert relay.state != 0


@given(st.binary(max_size=40))
def test_decode_is_idempotent(frame):
    assert decode_relay_states(frame) == decode_relay_states(frame)


@given(st.binary(max_size=17))
def test_short_frames_yield_fewer_entries(frame):
    relays = decode_relay_states(frame)
    assert len(relays) == max(0, len(frame) - 2)


@given(any_states, st.binary(max_size=8))
def test_bytes_after_state_block_are_ignored(states, extra):
    frame = b"\xcc\x0c" + bytes(states)
    assert decode_relay_states(frame + extra) == decode_relay_states(frame)
    assert is_valid_frame(frame + extra) == is_valid_frame(frame)


@given(any_states)
def test_validator_rejects_any_state_above_two(states):
    assert is_valid_frame(make_frame(states)) == all(value <= 2 for value in states)


@given(settled_states, headers)
def test_validator_ignores_header(states, header):
    assert is_valid_frame(make_frame(states, header=header))


def test_scenario_frame_decodes():
    relays = decode_relay_states(bytes([0, 0, 1, 0, 2] + [0] * 13))
    assert [r.model_dump() for r in relays[:4]] == [
        {"id": 0, "state": 1},
        {"id": 1, "state": 0},
        {"id": 2, "state": 0},
        {"id": 3, "state": 0},
    ]
    assert len(relays) == 16
    assert all(r.state == 0 for r in relays[1:])


def test_empty_frame_is_valid_and_empty():
    assert decode_relay_states(b"") == []
    assert is_valid_frame(b"")
