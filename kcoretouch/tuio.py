"""TUIO 2Dcur output over OSC, Flash XML over TCP and a compact binary form."""

from __future__ import annotations

import struct
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Union

from .geometry import Blob

CURSOR_ADDRESS = "/tuio/2Dcur"
BUNDLE_TAG = b"#bundle\0"
IMMEDIATE_TIMETAG = 1
BINARY_HEADER = b"CCV\0"
DEFAULT_FLASH_PORT = 3000

OscArg = Union[str, int, float]
BlobMap = Mapping[int, Blob]


def _osc_string(text: str) -> bytes:
    raw = text.encode("ascii") + b"\0"
    return raw + b"\0" * (-len(raw) % 4)


def encode_osc_message(address: str, args: Sequence[OscArg]) -> bytes:
    """Encode one OSC message with string, int32 and float32 arguments."""
    tags = ","
    payload = bytearray()
    for arg in args:
        if isinstance(arg, bool):
            raise TypeError("boolean OSC arguments are not supported")
        if isinstance(arg, str):
            tags += "s"
            payload += _osc_string(arg)
        elif isinstance(arg, int):
            tags += "i"
            payload += struct.pack(">i", arg)
        elif isinstance(arg, float):
            tags += "f"
            payload += struct.pack(">f", arg)
        else:
            raise TypeError(f"unsupported OSC argument type: {type(arg).__name__}")
    return _osc_string(address) + _osc_string(tags) + bytes(payload)


def encode_osc_bundle(messages: Iterable[bytes]) -> bytes:
    """Wrap encoded OSC messages in a bundle with an immediate time tag."""
    out = bytearray(BUNDLE_TAG)
    out += struct.pack(">Q", IMMEDIATE_TIMETAG)
    for message in messages:
        out += struct.pack(">i", len(message))
        out += message
    return bytes(out)


def _visible(blobs: BlobMap) -> list[Blob]:
    """Blobs in key order, leaving out those at (0, 0), which lie outside the range."""
    return [
        blob
        for _, blob in sorted(blobs.items())
        if not (blob.centroid.x == 0 and blob.centroid.y == 0)
    ]


def _set_args(blob: Blob, height_width: bool) -> list[OscArg]:
    args: list[OscArg] = [
        "set",
        int(blob.id),
        float(blob.centroid.x),
        float(blob.centroid.y),
        float(blob.d.x),
        float(blob.d.y),
        float(blob.maccel),
    ]
    if height_width:
        args += [float(blob.width), float(blob.height)]
    return args


def build_osc_bundle(blobs: BlobMap, frameseq: int, height_width: bool = False) -> bytes:
    """A TUIO bundle: one 'set' per visible blob, then 'alive' and 'fseq'."""
    visible = _visible(blobs)
    messages = [encode_osc_message(CURSOR_ADDRESS, _set_args(b, height_width)) for b in visible]
    alive: list[OscArg] = ["alive", *(int(b.id) for b in visible)]
    messages.append(encode_osc_message(CURSOR_ADDRESS, alive))
    messages.append(encode_osc_message(CURSOR_ADDRESS, ["fseq", int(frameseq)]))
    return encode_osc_bundle(messages)


def _text(value: float | int) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return f"{value:g}"


def _xml_arg(kind: str, value: str) -> str:
    return f'<ARGUMENT TYPE="{kind}" VALUE="{value}"/>'


def build_flash_packet(
    blob_groups: Iterable[BlobMap],
    frameseq: int,
    port: int,
    elapsed: float,
    height_width: bool = False,
) -> str:
    """The XML OSC packet sent to Flash clients for all blob groups together."""
    set_messages = []
    alive_ids = []
    for group in blob_groups:
        for blob in _visible(group):
            fields = [blob.centroid.x, blob.centroid.y, blob.d.x, blob.d.y, blob.maccel]
            if height_width:
                fields += [blob.width, blob.height]
            set_messages.append(
                f'<MESSAGE NAME="{CURSOR_ADDRESS}">'
                + _xml_arg("s", "set")
                + _xml_arg("i", _text(int(blob.id)))
                + "".join(_xml_arg("f", _text(float(v))) for v in fields)
                + "</MESSAGE>"
            )
            alive_ids.append(_xml_arg("i", _text(int(blob.id))))
    alive = (
        f'<MESSAGE NAME="{CURSOR_ADDRESS}">' + _xml_arg("s", "alive") + "".join(alive_ids)
        + "</MESSAGE>"
    )
    fseq = (
        f'<MESSAGE NAME="{CURSOR_ADDRESS}">' + _xml_arg("s", "fseq")
        + _xml_arg("i", _text(int(frameseq))) + "</MESSAGE>"
    )
    header = (
        f'<OSCPACKET ADDRESS="127.0.0.1" PORT="{_text(int(port))}" '
        f'TIME="{_text(float(elapsed))}">'
    )
    return header + "".join(set_messages) + alive + fseq + "</OSCPACKET>"


def build_binary_packet(blobs: BlobMap, height_width: bool = False) -> bytes:
    """'CCV\\0', a little-endian blob count, then per blob an id and float32 fields."""
    visible = _visible(blobs)
    out = bytearray(BINARY_HEADER)
    out += struct.pack("<i", len(visible))
    for blob in visible:
        out += struct.pack("<i", int(blob.id))
        fields = [blob.centroid.x, blob.centroid.y, blob.d.x, blob.d.y, blob.maccel]
        if height_width:
            fields += [blob.width, blob.height]
        out += struct.pack(f"<{len(fields)}f", *fields)
    return bytes(out)


class TuioSender:
    """Sends tracked blobs every frame over whichever transports are enabled."""

    def __init__(
        self,
        osc_send: Callable[[bytes], object] | None = None,
        tcp_send: Callable[[str], object] | None = None,
        raw_send: Callable[[bytes], object] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.osc_send = osc_send
        self.tcp_send = tcp_send
        self.raw_send = raw_send
        if clock is None:
            start = time.monotonic()

            def clock() -> float:
                return time.monotonic() - start

        self.clock = clock
        self.flash_port = DEFAULT_FLASH_PORT
        self.frameseq = 0
        self.height_width = False
        self.osc_mode = True
        self.tcp_mode = False
        self.binary_mode = False
        self.blobs = True
        self.fingers = False
        self.objects = False

    def set_mode(self, blobs: bool, fingers: bool, objects: bool) -> None:
        """Choose which groups to send; plain blobs are always sent."""
        self.blobs = True
        self.fingers = fingers
        self.objects = objects

    def send_tuio(
        self, blob_blobs: BlobMap, finger_blobs: BlobMap, object_blobs: BlobMap
    ) -> None:
        """Advance the frame counter and send this frame's blobs."""
        self.frameseq += 1

        if self.osc_mode and self.osc_send is not None:
            for enabled, group in (
                (self.blobs, blob_blobs),
                (self.fingers, finger_blobs),
                (self.objects, object_blobs),
            ):
                if enabled:
                    self.osc_send(build_osc_bundle(group, self.frameseq, self.height_width))

        if self.tcp_mode and self.tcp_send is not None:
            if self.blobs or self.fingers or self.objects:
                self.tcp_send(
                    build_flash_packet(
                        (blob_blobs, finger_blobs, object_blobs),
                        self.frameseq,
                        self.flash_port,
                        self.clock(),
                        self.height_width,
                    )
                )

        if self.binary_mode and self.raw_send is not None:
            if self.blobs:
                self.raw_send(build_binary_packet(blob_blobs, self.height_width))
            if self.fingers:
                self.raw_send(build_binary_packet(finger_blobs, self.height_width))