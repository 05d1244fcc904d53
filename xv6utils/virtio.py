"""Virtio MMIO register offsets and virtqueue structures."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field, fields
from typing import ClassVar

# MMIO control registers.
VIRTIO_MMIO_MAGIC_VALUE = 0x000
VIRTIO_MMIO_VERSION = 0x004
VIRTIO_MMIO_DEVICE_ID = 0x008
VIRTIO_MMIO_VENDOR_ID = 0x00C
VIRTIO_MMIO_DEVICE_FEATURES = 0x010
VIRTIO_MMIO_DRIVER_FEATURES = 0x020
VIRTIO_MMIO_QUEUE_SEL = 0x030
VIRTIO_MMIO_QUEUE_NUM_MAX = 0x034
VIRTIO_MMIO_QUEUE_NUM = 0x038
VIRTIO_MMIO_QUEUE_READY = 0x044
VIRTIO_MMIO_QUEUE_NOTIFY = 0x050
VIRTIO_MMIO_INTERRUPT_STATUS = 0x060
VIRTIO_MMIO_INTERRUPT_ACK = 0x064
VIRTIO_MMIO_STATUS = 0x070
VIRTIO_MMIO_QUEUE_DESC_LOW = 0x080
VIRTIO_MMIO_QUEUE_DESC_HIGH = 0x084
VIRTIO_MMIO_DRIVER_DESC_LOW = 0x090
VIRTIO_MMIO_DRIVER_DESC_HIGH = 0x094
VIRTIO_MMIO_DEVICE_DESC_LOW = 0x0A0
VIRTIO_MMIO_DEVICE_DESC_HIGH = 0x0A4

# Status register bits.
VIRTIO_CONFIG_S_ACKNOWLEDGE = 1
VIRTIO_CONFIG_S_DRIVER = 2
VIRTIO_CONFIG_S_DRIVER_OK = 4
VIRTIO_CONFIG_S_FEATURES_OK = 8

# Device feature bits.
VIRTIO_BLK_F_RO = 5
VIRTIO_BLK_F_SCSI = 7
VIRTIO_BLK_F_CONFIG_WCE = 11
VIRTIO_BLK_F_MQ = 12
VIRTIO_F_ANY_LAYOUT = 27
VIRTIO_RING_F_INDIRECT_DESC = 28
VIRTIO_RING_F_EVENT_IDX = 29

NUM = 8  # descriptors per queue; a power of two

VRING_DESC_F_NEXT = 1
VRING_DESC_F_WRITE = 2

VIRTIO_BLK_T_IN = 0
VIRTIO_BLK_T_OUT = 1

_DESC = struct.Struct("<QIHH")
_AVAIL = struct.Struct(f"<HH{NUM}HH")
_USED_ELEM = struct.Struct("<II")
_USED_HEAD = struct.Struct("<HH")
_BLK_REQ = struct.Struct("<IIQ")


def _pack(layout: struct.Struct, *values: int) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ValueError(str(exc)) from exc


def _check_length(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"truncated {what}: need {size} bytes, got {len(data)}")


@dataclass(frozen=True)
class VirtqDesc:
    """One descriptor of a virtqueue."""

    addr: int = 0
    len: int = 0
    flags: int = 0
    next: int = 0

    SIZE: ClassVar[int] = _DESC.size

    def pack(self) -> bytes:
        """Encode the descriptor."""
        return _pack(_DESC, *(getattr(self, f.name) for f in fields(self)))


@dataclass(frozen=True)
class VirtqAvail:
    """The driver's available ring."""

    flags: int = 0
    idx: int = 0
    ring: tuple[int, ...] = (0,) * NUM
    unused: int = 0

    SIZE: ClassVar[int] = _AVAIL.size

    def __post_init__(self) -> None:
        ring = tuple(self.ring)
        if len(ring) != NUM:
            raise ValueError(f"available ring must hold {NUM} entries")
        object.__setattr__(self, "ring", ring)

    def pack(self) -> bytes:
        """Encode the available ring."""
        return _pack(_AVAIL, self.flags, self.idx, *self.ring, self.unused)


@dataclass(frozen=True)
class VirtqUsedElem:
    """One completed request reported by the device."""

    id: int = 0
    len: int = 0


@dataclass(frozen=True)
class VirtqUsed:
    """The device's used ring."""

    flags: int = 0
    idx: int = 0
    ring: tuple[VirtqUsedElem, ...] = field(
        default_factory=lambda: tuple(VirtqUsedElem() for _ in range(NUM))
    )

    SIZE: ClassVar[int] = _USED_HEAD.size + NUM * _USED_ELEM.size

    def __post_init__(self) -> None:
        ring = tuple(self.ring)
        if len(ring) != NUM:
            raise ValueError(f"used ring must hold {NUM} entries")
        object.__setattr__(self, "ring", ring)

    def pack(self) -> bytes:
        """Encode the used ring."""
        head = _pack(_USED_HEAD, self.flags, self.idx)
        return head + b"".join(_pack(_USED_ELEM, e.id, e.len) for e in self.ring)


@dataclass(frozen=True)
class BlkRequest:
    """First descriptor of a block device request."""

    type: int = VIRTIO_BLK_T_IN
    reserved: int = 0
    sector: int = 0

    SIZE: ClassVar[int] = _BLK_REQ.size

    def pack(self) -> bytes:
        """Encode the request header."""
        return _pack(_BLK_REQ, self.type, self.reserved, self.sector)


def unpack_desc(data: bytes) -> VirtqDesc:
    """Decode a descriptor."""
    _check_length(data, VirtqDesc.SIZE, "descriptor")
    return VirtqDesc(*_DESC.unpack_from(data))


def unpack_avail(data: bytes) -> VirtqAvail:
    """Decode an available ring."""
    _check_length(data, VirtqAvail.SIZE, "available ring")
    flags, idx, *rest = _AVAIL.unpack_from(data)
    return VirtqAvail(flags, idx, tuple(rest[:NUM]), rest[NUM])


def unpack_used(data: bytes) -> VirtqUsed:
    """Decode a used ring."""
    _check_length(data, VirtqUsed.SIZE, "used ring")
    flags, idx = _USED_HEAD.unpack_from(data)
    ring = tuple(
        VirtqUsedElem(*elem)
        for elem in _USED_ELEM.iter_unpack(data[_USED_HEAD.size : VirtqUsed.SIZE])
    )
    return VirtqUsed(flags, idx, ring)


def unpack_blk_request(data: bytes) -> BlkRequest:
    """Decode a block request header."""
    _check_length(data, BlkRequest.SIZE, "block request")
    return BlkRequest(*_BLK_REQ.unpack_from(data))