import struct

import pytest

from kcoretouch.geometry import Blob, Vector2D
from kcoretouch.tuio import (
    TuioSender,
    build_binary_packet,
    build_flash_packet,
    build_osc_bundle,
    encode_osc_bundle,
    encode_osc_message,
)


def _read_string(data, pos):
    end = data.index(b"\0", pos)
    text = data[pos:end].decode("ascii")
    return text, (end + 4) & ~3


def _decode_message(data):
    address, pos = _read_string(data, 0)
    tags, pos = _read_string(data, pos)
    args = []
    for tag in tags[1:]:
        if tag == "s":
            value, pos = _read_string(data, pos)
        elif tag == "i":
            (value,) = struct.unpack(">i", data[pos : pos + 4])
            pos += 4
        else:
            (value,) = struct.unpack(">f", data[pos : pos + 4])
            pos += 4
        args.append(value)
    assert pos == len(data)
    return address, args


def _decode_bundle(data):
    assert data[:8] == b"#bundle\0"
    pos = 16
    messages = []
    while pos < len(data):
        (size,) = struct.unpack(">i", data[pos : pos + 4])
        messages.append(_decode_message(data[pos + 4 : pos + 4 + size]))
        pos += 4 + size
    return messages


def _blob(id_, x, y, **kw):
    return Blob(id=id_, centroid=Vector2D(x, y), **kw)


def test_encode_osc_message_wire_bytes():
    data = encode_osc_message("/tuio/2Dcur", ["alive"])
    assert data == b"/tuio/2Dcur\0" + b",s\0\0" + b"alive\0\0\0"


def test_encode_osc_message_round_trip():
    data = encode_osc_message("/tuio/2Dcur", ["set", 7, 0.5, 0.25])
    assert len(data) % 4 == 0
    assert _decode_message(data) == ("/tuio/2Dcur", ["set", 7, 0.5, 0.25])


def test_encode_osc_message_rejects_unknown_types():
    with pytest.raises(TypeError):
        encode_osc_message("/tuio/2Dcur", [object()])
    with pytest.raises(TypeError):
        encode_osc_message("/tuio/2Dcur", [True])


def test_encode_osc_bundle_header():
    msg = encode_osc_message("/tuio/2Dcur", ["fseq", 3])
    data = encode_osc_bundle([msg])
    assert data[:8] == b"#bundle\0"
    assert struct.unpack(">Q", data[8:16]) == (1,)
    assert struct.unpack(">i", data[16:20]) == (len(msg),)
    assert data[20:] == msg


def test_osc_bundle_empty_has_alive_and_fseq():
    messages = _decode_bundle(build_osc_bundle({}, 5))
    assert messages == [("/tuio/2Dcur", ["alive"]), ("/tuio/2Dcur", ["fseq", 5])]


def test_osc_bundle_skips_origin_and_orders_by_key():
    blobs = {
        2: _blob(2, 0.5, 0.25, maccel=0.5),
        1: _blob(1, 0.25, 0.5),
        3: _blob(3, 0.0, 0.0),
    }
    messages = _decode_bundle(build_osc_bundle(blobs, 9))
    assert messages[0] == ("/tuio/2Dcur", ["set", 1, 0.25, 0.5, 0.0, 0.0, 0.0])
    assert messages[1] == ("/tuio/2Dcur", ["set", 2, 0.5, 0.25, 0.0, 0.0, 0.5])
    assert messages[2] == ("/tuio/2Dcur", ["alive", 1, 2])
    assert messages[3] == ("/tuio/2Dcur", ["fseq", 9])


def test_osc_bundle_height_width_adds_two_floats():
    blobs = {4: _blob(4, 0.5, 0.5, width=0.25, height=0.125)}
    set_args = _decode_bundle(build_osc_bundle(blobs, 1, True))[0][1]
    assert len(set_args) == 9
    assert set_args[-2:] == [0.25, 0.125]


def test_flash_packet_empty_matches_source_form():
    packet = build_flash_packet([{}, {}, {}], 4, 3000, 1.5)
    assert packet == (
        '<OSCPACKET ADDRESS="127.0.0.1" PORT="3000" TIME="1.5">'
        '<MESSAGE NAME="/tuio/2Dcur"><ARGUMENT TYPE="s" VALUE="alive"/></MESSAGE>'
        '<MESSAGE NAME="/tuio/2Dcur"><ARGUMENT TYPE="s" VALUE="fseq"/>'
        '<ARGUMENT TYPE="i" VALUE="4"/></MESSAGE></OSCPACKET>'
    )


def test_flash_packet_includes_all_groups_and_skips_origin():
    groups = [{1: _blob(1, 0.5, 0.5)}, {2: _blob(2, 0.25, 0.25)}, {3: _blob(3, 0.0, 0.0)}]
    packet = build_flash_packet(groups, 2, 3000, 0.0)
    assert packet.count('<ARGUMENT TYPE="s" VALUE="set"/>') == 2
    assert '<ARGUMENT TYPE="s" VALUE="alive"/><ARGUMENT TYPE="i" VALUE="1"/>' \
        '<ARGUMENT TYPE="i" VALUE="2"/></MESSAGE>' in packet
    assert 'VALUE="3"' not in packet


def test_flash_packet_height_width_field_count():
    groups = [{1: _blob(1, 0.5, 0.5, width=0.25, height=0.25)}]
    plain = build_flash_packet(groups, 1, 3000, 0.0)
    sized = build_flash_packet(groups, 1, 3000, 0.0, True)
    assert sized.count('TYPE="f"') == plain.count('TYPE="f"') + 2


def test_binary_packet_empty():
    assert build_binary_packet({}) == b"CCV\0" + b"\0\0\0\0"


def test_binary_packet_round_trip():
    blobs = {5: _blob(5, 0.5, 0.25, maccel=0.125), 6: _blob(6, 0.0, 0.0)}
    data = build_binary_packet(blobs)
    assert data[:4] == b"CCV\0"
    assert struct.unpack("<i", data[4:8]) == (1,)
    assert struct.unpack("<i5f", data[8:]) == (5, 0.5, 0.25, 0.0, 0.0, 0.125)


def test_binary_packet_height_width_length():
    blobs = {1: _blob(1, 0.5, 0.5), 2: _blob(2, 0.25, 0.5)}
    plain = build_binary_packet(blobs)
    sized = build_binary_packet(blobs, True)
    assert len(sized) - len(plain) == 2 * 2 * 4


def test_sender_osc_mode_sends_enabled_groups():
    sent = []
    sender = TuioSender(osc_send=sent.append)
    sender.set_mode(False, True, False)
    assert sender.blobs is True
    sender.send_tuio({1: _blob(1, 0.5, 0.5)}, {}, {})
    assert len(sent) == 2
    assert _decode_bundle(sent[0])[-1] == ("/tuio/2Dcur", ["fseq", 1])
    sender.send_tuio({}, {}, {})
    assert sender.frameseq == 2


def test_sender_tcp_mode_uses_clock_and_port():
    packets = []
    sender = TuioSender(tcp_send=packets.append, clock=lambda: 2.5)
    sender.osc_mode = False
    sender.tcp_mode = True
    sender.flash_port = 3333
    sender.send_tuio({}, {}, {})
    assert len(packets) == 1
    assert packets[0].startswith('<OSCPACKET ADDRESS="127.0.0.1" PORT="3333" TIME="2.5">')


def test_sender_binary_mode_sends_blobs_and_fingers():
    raw = []
    sender = TuioSender(raw_send=raw.append)
    sender.osc_mode = False
    sender.binary_mode = True
    sender.set_mode(True, True, True)
    sender.send_tuio({1: _blob(1, 0.5, 0.5)}, {}, {7: _blob(7, 0.5, 0.5)})
    assert len(raw) == 2
    assert struct.unpack("<i", raw[0][4:8]) == (1,)
    assert struct.unpack("<i", raw[1][4:8]) == (0,)