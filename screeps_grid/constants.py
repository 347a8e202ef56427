"""
constants: room geometry and value ranges shared by every module.

A room is a square grid of side ROOM_SIZE. Every coordinate, iterator bound
and dense store shape is derived from this one value.
"""

ROOM_SIZE: int = 50
ROOM_AREA: int = ROOM_SIZE * ROOM_SIZE

# Largest values of the dense store element types; also the "unreached" sentinels
U8_MAX: int = 255
U16_MAX: int = 65535
