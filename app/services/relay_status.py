"""
Relay status frame helpers.

A status frame from the HLK-SW16 carries one byte per relay at offsets
2 through 17. The board reports 0x01 for on and 0x02 for off; 0x00 is seen
right after power-up. Anything above 0x02 means the frame was sampled while
the board was still switching.
"""
from typing import List

from app.models.relays import RelayState

STATE_OFFSET = 2
STATE_END = 18
MAX_STATE_VALUE = 2
OFF_VALUES = (0, 2)


def decode_relay_states(frame: bytes) -> List[RelayState]:
    """
    Map a raw status frame to per-relay states.

    Short frames yield fewer entries and bytes past the state block are
    ignored, so this never raises on malformed input.
    """
    relays = []
    for index, value in enumerate(frame[STATE_OFFSET:STATE_END]):
        relays.append(RelayState(id=index, state=0 if value in OFF_VALUES else value))
    return relays


def is_valid_frame(frame: bytes) -> bool:
    """Return True when every relay byte holds a settled state."""
    return all(value <= MAX_STATE_VALUE for value in frame[STATE_OFFSET:STATE_END])
