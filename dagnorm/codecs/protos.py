"""Protobuf message classes for dag-pb and UnixFS.

The schemas are small and stable, so they are declared here as a
``FileDescriptorProto`` and turned into message classes by the protobuf
runtime instead of shipping generated ``_pb2`` modules.

    message PBLink { optional bytes Hash = 1; optional string Name = 2; optional uint64 Tsize = 3; }
    message PBNode { repeated PBLink Links = 2; optional bytes Data = 1; }
    message Data   { required DataType Type = 1; optional bytes Data = 2; optional uint64 filesize = 3;
                     repeated uint64 blocksizes = 4; optional uint64 hashType = 5; optional uint64 fanout = 6;
                     optional uint32 mode = 7; optional UnixTime mtime = 8; }
"""

from __future__ import annotations

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.descriptor_pb2 import FieldDescriptorProto as _F

_PACKAGE = "dagnorm.pb"

# Order matters: the index is the wire value of UnixFS ``Data.Type``.
UNIXFS_DATA_TYPES = ("Raw", "Directory", "File", "Metadata", "Symlink", "HAMTShard")


def _build_file_proto() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="dagnorm/merkledag.proto", package=_PACKAGE, syntax="proto2"
    )

    link = proto.message_type.add(name="PBLink")
    link.field.add(name="Hash", number=1, label=_F.LABEL_OPTIONAL, type=_F.TYPE_BYTES)
    link.field.add(name="Name", number=2, label=_F.LABEL_OPTIONAL, type=_F.TYPE_STRING)
    link.field.add(name="Tsize", number=3, label=_F.LABEL_OPTIONAL, type=_F.TYPE_UINT64)

    node = proto.message_type.add(name="PBNode")
    node.field.add(
        name="Links",
        number=2,
        label=_F.LABEL_REPEATED,
        type=_F.TYPE_MESSAGE,
        type_name=f".{_PACKAGE}.PBLink",
    )
    node.field.add(name="Data", number=1, label=_F.LABEL_OPTIONAL, type=_F.TYPE_BYTES)

    unixtime = proto.message_type.add(name="UnixTime")
    unixtime.field.add(name="Seconds", number=1, label=_F.LABEL_REQUIRED, type=_F.TYPE_INT64)
    unixtime.field.add(
        name="FractionalNanoseconds", number=2, label=_F.LABEL_OPTIONAL, type=_F.TYPE_FIXED32
    )

    data = proto.message_type.add(name="Data")
    data_type = data.enum_type.add(name="DataType")
    for number, name in enumerate(UNIXFS_DATA_TYPES):
        data_type.value.add(name=name, number=number)
    data.field.add(
        name="Type",
        number=1,
        label=_F.LABEL_REQUIRED,
        type=_F.TYPE_ENUM,
        type_name=f".{_PACKAGE}.Data.DataType",
    )
    data.field.add(name="Data", number=2, label=_F.LABEL_OPTIONAL, type=_F.TYPE_BYTES)
    data.field.add(name="filesize", number=3, label=_F.LABEL_OPTIONAL, type=_F.TYPE_UINT64)
    data.field.add(name="blocksizes", number=4, label=_F.LABEL_REPEATED, type=_F.TYPE_UINT64)
    data.field.add(name="hashType", number=5, label=_F.LABEL_OPTIONAL, type=_F.TYPE_UINT64)
    data.field.add(name="fanout", number=6, label=_F.LABEL_OPTIONAL, type=_F.TYPE_UINT64)
    data.field.add(name="mode", number=7, label=_F.LABEL_OPTIONAL, type=_F.TYPE_UINT32)
    data.field.add(
        name="mtime",
        number=8,
        label=_F.LABEL_OPTIONAL,
        type=_F.TYPE_MESSAGE,
        type_name=f".{_PACKAGE}.UnixTime",
    )
    return proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_build_file_proto().SerializeToString())

PBLink = message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{_PACKAGE}.PBLink"))
PBNode = message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{_PACKAGE}.PBNode"))
UnixFSDataMessage = message_factory.GetMessageClass(
    _POOL.FindMessageTypeByName(f"{_PACKAGE}.Data")
)

__all__ = ["PBLink", "PBNode", "UNIXFS_DATA_TYPES", "UnixFSDataMessage"]
