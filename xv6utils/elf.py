"""ELF64 executable file header and program header."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, fields
from typing import ClassVar

ELF_MAGIC = 0x464C457F  # "\x7FELF" read little endian
ELF_PROG_LOAD = 1

_ELFHDR = struct.Struct("<I12sHHIQQQIHHHHHH")
_PROGHDR = struct.Struct("<IIQQQQQQ")


class ElfError(ValueError):
    """Raised for malformed ELF data."""


class ProgFlag(enum.IntFlag):
    """Program header permission bits."""

    EXEC = 1
    WRITE = 2
    READ = 4


def _values(obj) -> tuple:
    return tuple(getattr(obj, f.name) for f in fields(obj))


def _pack(layout: struct.Struct, values: tuple) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ElfError(str(exc)) from exc


@dataclass
class ElfHeader:
    """ELF file header."""

    magic: int = ELF_MAGIC
    elf: bytes = bytes(12)
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0

    SIZE: ClassVar[int] = _ELFHDR.size

    def __post_init__(self) -> None:
        if len(self.elf) != 12:
            raise ElfError("ident field must be 12 bytes")

    def pack(self) -> bytes:
        """Encode the header as it appears on disk."""
        return _pack(_ELFHDR, _values(self))


@dataclass
class ProgramHeader:
    """ELF program section header."""

    type: int = 0
    flags: int = 0
    off: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    align: int = 0

    SIZE: ClassVar[int] = _PROGHDR.size

    def pack(self) -> bytes:
        """Encode the program header as it appears on disk."""
        return _pack(_PROGHDR, _values(self))

    def is_loadable(self) -> bool:
        """True if this segment is to be loaded into memory."""
        return self.type == ELF_PROG_LOAD


def parse_elf_header(data: bytes) -> ElfHeader:
    """Decode an ELF header, checking its magic number."""
    if len(data) < ElfHeader.SIZE:
        raise ElfError("truncated ELF header")
    header = ElfHeader(*_ELFHDR.unpack_from(data))
    if header.magic != ELF_MAGIC:
        raise ElfError("bad ELF magic")
    return header


def parse_program_header(data: bytes) -> ProgramHeader:
    """Decode one program header."""
    if len(data) < ProgramHeader.SIZE:
        raise ElfError("truncated program header")
    return ProgramHeader(*_PROGHDR.unpack_from(data))