"""
pprof.py

Message classes for the pprof profile format (`perftools.profiles`, as defined
by profile.proto) and a loader for gzipped or raw profile files.

The classes are built from a descriptor at import time so no generated
`profile_pb2` module has to be shipped.
"""

import gzip
import logging
import zlib

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError

from .errors import ProfileError

logger = logging.getLogger(__name__)

PACKAGE = "perftools.profiles"
GZIP_MAGIC = b"\x1f\x8b"

_F = descriptor_pb2.FieldDescriptorProto

INT64 = _F.TYPE_INT64
UINT64 = _F.TYPE_UINT64
BOOL = _F.TYPE_BOOL
STRING = _F.TYPE_STRING

# message -> [(field name, number, type or message name, repeated)]
MESSAGES = {
    "Profile": [
        ("sample_type", 1, "ValueType", True),
        ("sample", 2, "Sample", True),
        ("mapping", 3, "Mapping", True),
        ("location", 4, "Location", True),
        ("function", 5, "Function", True),
        ("string_table", 6, STRING, True),
        ("drop_frames", 7, INT64, False),
        ("keep_frames", 8, INT64, False),
        ("time_nanos", 9, INT64, False),
        ("duration_nanos", 10, INT64, False),
        ("period_type", 11, "ValueType", False),
        ("period", 12, INT64, False),
        ("comment", 13, INT64, True),
        ("default_sample_type", 14, INT64, False),
    ],
    "ValueType": [
        ("type", 1, INT64, False),
        ("unit", 2, INT64, False),
    ],
    "Sample": [
        ("location_id", 1, UINT64, True),
        ("value", 2, INT64, True),
        ("label", 3, "Label", True),
    ],
    "Label": [
        ("key", 1, INT64, False),
        ("str", 2, INT64, False),
        ("num", 3, INT64, False),
        ("num_unit", 4, INT64, False),
    ],
    "Mapping": [
        ("id", 1, UINT64, False),
        ("memory_start", 2, UINT64, False),
        ("memory_limit", 3, UINT64, False),
        ("file_offset", 4, UINT64, False),
        ("filename", 5, INT64, False),
        ("build_id", 6, INT64, False),
        ("has_functions", 7, BOOL, False),
        ("has_filenames", 8, BOOL, False),
        ("has_line_numbers", 9, BOOL, False),
        ("has_inline_frames", 10, BOOL, False),
    ],
    "Location": [
        ("id", 1, UINT64, False),
        ("mapping_id", 2, UINT64, False),
        ("address", 3, UINT64, False),
        ("line", 4, "Line", True),
        ("is_folded", 5, BOOL, False),
    ],
    "Line": [
        ("function_id", 1, UINT64, False),
        ("line", 2, INT64, False),
        ("column", 3, INT64, False),
    ],
    "Function": [
        ("id", 1, UINT64, False),
        ("name", 2, INT64, False),
        ("system_name", 3, INT64, False),
        ("filename", 4, INT64, False),
        ("start_line", 5, INT64, False),
    ],
}


def _file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="diago/profile.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    for message_name, fields in MESSAGES.items():
        message = file_proto.message_type.add(name=message_name)
        for field_name, number, kind, repeated in fields:
            field = message.field.add(
                name=field_name,
                number=number,
                label=_F.LABEL_REPEATED if repeated else _F.LABEL_OPTIONAL,
            )
            if isinstance(kind, str):
                field.type = _F.TYPE_MESSAGE
                field.type_name = f".{PACKAGE}.{kind}"
            else:
                field.type = kind
    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.Add(_file_descriptor())


def _message_class(name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))


Profile = _message_class("Profile")
ValueType = _message_class("ValueType")
Sample = _message_class("Sample")
Label = _message_class("Label")
Mapping = _message_class("Mapping")
Location = _message_class("Location")
Line = _message_class("Line")
Function = _message_class("Function")


def parse_profile(data: bytes):
    """Decode profile bytes, gunzipping them first when needed."""
    if data[:2] == GZIP_MAGIC:
        try:
            data = gzip.decompress(data)
        except (OSError, EOFError, zlib.error) as exc:
            raise ProfileError(f"gunzip failed: {exc}", kind="decode") from exc
    try:
        return Profile.FromString(data)
    except DecodeError as exc:
        raise ProfileError(f"not a pprof profile: {exc}", kind="decode") from exc


def read_profile(path: str):
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise ProfileError(f"cannot read {path}: {exc}", kind="read") from exc
    logger.debug("read %d bytes from %s", len(data), path)
    return parse_profile(data)
