"""
Runtime registration of the transcription stream schema (stt_msg.proto).

The descriptors are built in code and added to a private descriptor pool, so
the message classes are available without running protoc. Field numbers must
stay in sync with stt_msg.proto.
"""
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "live_subtitles.stt"

_F = descriptor_pb2.FieldDescriptorProto

WORD_FIELDS = [
    ("text", 1, _F.TYPE_STRING),
    ("start_ms", 2, _F.TYPE_INT32),
    ("duration_ms", 3, _F.TYPE_INT32),
    ("is_final", 4, _F.TYPE_BOOL),
    ("confidence", 5, _F.TYPE_DOUBLE),
]

TEXT_FIELDS = [
    ("vendor", 1, _F.TYPE_INT32),
    ("version", 2, _F.TYPE_INT32),
    ("seqnum", 3, _F.TYPE_INT32),
    ("uid", 4, _F.TYPE_INT64),  # call uids are unsigned 32-bit
    ("flag", 5, _F.TYPE_INT32),
    ("time", 6, _F.TYPE_INT64),
    ("lang", 7, _F.TYPE_INT32),
    ("starttime", 8, _F.TYPE_INT32),
    ("offtime", 9, _F.TYPE_INT32),
]


def _add_scalars(message, fields):
    for name, number, field_type in fields:
        message.field.add(
            name=name,
            number=number,
            type=field_type,
            label=_F.LABEL_OPTIONAL,
        )


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="live_subtitles/stt/stt_msg.proto",
        package=PACKAGE,
        syntax="proto3",
    )

    word = file_proto.message_type.add(name="Word")
    _add_scalars(word, WORD_FIELDS)

    text = file_proto.message_type.add(name="Text")
    _add_scalars(text, TEXT_FIELDS)
    text.field.add(
        name="words",
        number=10,
        type=_F.TYPE_MESSAGE,
        type_name=f".{PACKAGE}.Word",
        label=_F.LABEL_REPEATED,
    )
    return file_proto


_pool = descriptor_pool.DescriptorPool()
DESCRIPTOR = _pool.AddSerializedFile(_build_file().SerializeToString())

Word = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.Word"))
Text = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.Text"))
